"""Wording of the automated SMS messages."""

from __future__ import annotations


def format_kes(amount: float) -> str:
    """Amount with thousands separators, without decimals when it is a whole number."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def payment_confirmation(full_name: str, amount: float, business_name: str) -> str:
    return (
        f"Dear {full_name}, your payment of KES {format_kes(amount)} has been received. "
        f"Thank you! - {business_name}"
    )


def payment_reminder(full_name: str, daily_remittance: float, business_name: str) -> str:
    return (
        f"Dear {full_name}, this is a reminder that your daily remittance of KES "
        f"{format_kes(daily_remittance)} is due before 9PM today. Please make your payment. - {business_name}"
    )


def late_payment_warning(full_name: str, days_without_payment: int, business_name: str) -> str:
    return (
        f"Dear {full_name}, you have not made a payment in {days_without_payment} days. "
        f"Please clear your outstanding remittances immediately. - {business_name}"
    )


def repossession_notice(full_name: str, days_without_payment: int, business_name: str) -> str:
    return (
        f"Dear {full_name}, no payment has been received in {days_without_payment} days and your "
        f"motorcycle is now due for repossession. Contact us today. - {business_name}"
    )


def ownership_congratulations(full_name: str, period_days: int, business_name: str) -> str:
    return (
        f"Congratulations {full_name}! You have successfully completed your {period_days}-day payment "
        f"period and now fully own your motorcycle. Thank you for your commitment! - {business_name}"
    )
