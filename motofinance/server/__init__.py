"""
MotoFinance Server Package.

This package contains the web server implementation for the back office.
It includes the API definition, configuration and the service layer.

Subpackages:
    api: FastAPI route definitions, one module per back-office page.
    core: Configuration and constants.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request timing and monitoring.
    services: Business logic over the repositories, plus FastAPI dependencies.
"""
