"""
Service layer for the back-office API.

Modules:
- auth: Password hashing, sign-up/sign-in sessions and role changes
- financing: Converting prospects and closing financing agreements
- payments: Recording payments and repayment progress
- reports: Profit analysis, yearly reports and dashboard counters
- sms: SMS gateways, dispatch and automation
- deps: FastAPI dependencies
"""
