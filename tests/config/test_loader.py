"""Tests for layered configuration loading."""

from pathlib import Path

import pytest

from vmctl.config.discovery import ROOTFILE_NAME
from vmctl.config.loader import DEFAULTS_PATH, ConfigBuilder, deep_merge, load_config
from vmctl.config.models import VmctlConfig
from vmctl.errors import ConfigError
from tests.conftest import track_reads, write_rootfile


class TestDeepMerge:
    def test_nested_tables_merge(self) -> None:
        base = {"vm": {"box": "a", "box_ovf": "box.ovf"}, "ssh": {"port": 1}}
        override = {"vm": {"box": "b"}}
        assert deep_merge(base, override) == {
            "vm": {"box": "b", "box_ovf": "box.ovf"},
            "ssh": {"port": 1},
        }

    def test_scalars_and_lists_replace(self) -> None:
        assert deep_merge({"a": [1, 2], "b": {"c": 1}}, {"a": [3], "b": 5}) == {"a": [3], "b": 5}

    def test_inputs_untouched(self) -> None:
        base = {"vm": {"box": "a"}}
        deep_merge(base, {"vm": {"box": "b"}})
        assert base == {"vm": {"box": "a"}}


class TestConfigBuilder:
    def test_missing_source_is_skipped(self, tmp_path: Path) -> None:
        builder = ConfigBuilder()
        assert builder.load(tmp_path / "nope.toml") is False
        assert builder.sources == []
        assert builder.execute() == VmctlConfig()

    def test_later_layers_win(self, tmp_path: Path) -> None:
        first = tmp_path / "first.toml"
        first.write_text('[vm]\nbox = "one"\nbase_mac = "AAAA"\n')
        second = tmp_path / "second.toml"
        second.write_text('[vm]\nbox = "two"\n')
        builder = ConfigBuilder()
        assert builder.load(first)
        assert builder.load(second)
        cfg = builder.execute()
        assert cfg.vm.box == "two"
        assert cfg.vm.base_mac == "AAAA"
        assert builder.sources == [first, second]

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("[vm\nbox = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            ConfigBuilder().load(bad)

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_bytes(b'[vm]\nbox = "\xff\xfe"\n')
        with pytest.raises(ConfigError, match="Invalid TOML") as exc_info:
            ConfigBuilder().load(bad)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text('[ssh]\ntimeout = "soon"\n')
        builder = ConfigBuilder()
        builder.load(bad)
        with pytest.raises(ConfigError) as exc_info:
            builder.execute()
        assert exc_info.value.code == "INVALID_CONFIG"

    def test_builders_are_independent(self, tmp_path: Path) -> None:
        src = tmp_path / "a.toml"
        src.write_text('[vm]\nbox = "a"\n')
        first = ConfigBuilder()
        first.load(src)
        assert ConfigBuilder().layers == []


class TestLoadConfig:
    def test_shipped_defaults_match_models(self) -> None:
        loaded = load_config(None)
        assert loaded.sources == (DEFAULTS_PATH,)
        assert loaded.config == VmctlConfig()

    def test_defaults_only_without_root(self, tmp_path: Path) -> None:
        write_rootfile(tmp_path, '[vm]\nbox = "ignored"\n')
        loaded = load_config(None)
        assert loaded.config.vm.box is None

    def test_project_rootfile_overrides_defaults(self, tmp_path: Path) -> None:
        rootfile = write_rootfile(tmp_path, '[vm]\nbox = "base"\n[ssh]\nmax_tries = 3\n')
        loaded = load_config(tmp_path)
        assert loaded.sources == (DEFAULTS_PATH, rootfile)
        assert loaded.config.vm.box == "base"
        assert loaded.config.ssh.max_tries == 3
        assert loaded.config.ssh.timeout == 10  # default preserved

    def test_nested_override_keeps_sibling_ports(self, tmp_path: Path) -> None:
        write_rootfile(tmp_path, "[vm.forwarded_ports.web]\nguest = 80\nhost = 8080\n")
        ports = load_config(tmp_path).config.vm.forwarded_ports
        assert set(ports) == {"ssh", "web"}
        assert ports["web"].host == 8080

    def test_missing_defaults_tolerated(self, tmp_path: Path) -> None:
        loaded = load_config(None, defaults_path=tmp_path / "missing.toml")
        assert loaded.sources == ()
        assert loaded.config == VmctlConfig()

    def test_root_without_rootfile(self, tmp_path: Path) -> None:
        loaded = load_config(tmp_path)
        assert loaded.sources == (DEFAULTS_PATH,)

    def test_box_layer_between_defaults_and_project(self, tmp_path: Path) -> None:
        box_dir = tmp_path / "box"
        box_dir.mkdir()
        box_file = write_rootfile(box_dir, '[ssh]\nusername = "boxuser"\nmax_tries = 2\n')
        project = tmp_path / "project"
        project.mkdir()
        rootfile = write_rootfile(project, "[ssh]\nmax_tries = 7\n")

        loaded = load_config(project, box_directory=box_dir)

        assert loaded.sources == (DEFAULTS_PATH, box_file, rootfile)
        assert loaded.config.ssh.username == "boxuser"
        assert loaded.config.ssh.max_tries == 7

    def test_repeated_loads_identical(self, tmp_path: Path) -> None:
        write_rootfile(tmp_path, '[vm]\nbox = "base"\n')
        results = [load_config(tmp_path) for _ in range(3)]
        assert results[0] == results[1] == results[2]
        assert results[0].config.model_dump_json() == results[2].config.model_dump_json()

    def test_never_reads_project_source_without_root(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        reads = track_reads(monkeypatch)
        load_config(None)
        assert set(reads) == {DEFAULTS_PATH}
        assert all(p.name != ROOTFILE_NAME for p in reads)
