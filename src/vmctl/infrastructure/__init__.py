"""Infrastructure layer — filesystem state and external registries.

This layer depends on stdlib and the domain handles only.
It must never import from services, commands, or output.
"""
