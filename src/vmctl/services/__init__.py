"""Service layer — operations over a bootstrapped environment.

Services return :class:`~vmctl.services.result.ServiceResult`.
"""
