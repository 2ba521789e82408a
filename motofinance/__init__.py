"""MotoFinance.

Back-office service for a motorcycle financing business.

Staff register prospective riders, convert them into financed riders who
take a bike and repay it through a daily remittance, track the bike
inventory, record payments and business expenses, read profit/loss
reports and dispatch SMS notifications to riders.

Core subpackages
----------------

- ``motofinance.core``:

  - Logging and monitoring configuration.
  - Domain enums, request/response models and validation rules.
  - SQLModel entities and async repositories.

- ``motofinance.server``:

  - The FastAPI application exposing one router per back-office page.
  - ``server.services``: authentication, financing conversion, payment
    progress, reports and SMS dispatch/automation as plain async functions
    over the repositories.
"""
