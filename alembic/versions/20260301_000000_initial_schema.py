"""Initial schema for MotoFinance

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates every back-office table:
- Staff accounts (profiles, auth_sessions)
- Riders and inventory (potential_riders, financed_riders, bikes)
- Money (payments, business_expenses, journal_entries)
- Outgoing messages (sms_notifications)

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if with_updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False))
    return columns


def _personal_columns() -> list:
    return [
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("postal_address", sa.String(200), nullable=False),
        sa.Column("primary_phone", sa.String(20), nullable=False),
        sa.Column("secondary_phone", sa.String(20), nullable=True),
        sa.Column("tertiary_phone", sa.String(20), nullable=True),
    ]


def upgrade() -> None:
    """Create all tables."""

    # Create profiles table
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_profiles_email", "email", unique=True),
        sa.Index("ix_profiles_created_at", "created_at"),
    )

    # Create auth_sessions table
    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("profile_id", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_auth_sessions_token", "token", unique=True),
        sa.Index("ix_auth_sessions_profile_id", "profile_id"),
    )

    # Create potential_riders table
    op.create_table(
        "potential_riders",
        sa.Column("id", sa.String(36), nullable=False),
        *_personal_columns(),
        sa.Column("id_number", sa.String(8), nullable=False),
        sa.Column("introducer_name", sa.String(100), nullable=True),
        sa.Column("introducer_id", sa.String(20), nullable=True),
        sa.Column("introducer_phone", sa.String(20), nullable=True),
        sa.Column("introducer_residential_area", sa.String(200), nullable=True),
        sa.Column("introducer_previous_bike", sa.String(100), nullable=True),
        sa.Column("preferred_bike_make", sa.String(100), nullable=True),
        sa.Column("probable_financing_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.id"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_potential_riders_full_name", "full_name"),
        sa.Index("ix_potential_riders_id_number", "id_number", unique=True),
        sa.Index("ix_potential_riders_status", "status"),
        sa.Index("ix_potential_riders_created_at", "created_at"),
    )

    # Create bikes table; current_rider_id gets its foreign key once financed_riders exists
    op.create_table(
        "bikes",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("make", sa.String(50), nullable=False),
        sa.Column("chassis_no", sa.String(50), nullable=False),
        sa.Column("engine_no", sa.String(50), nullable=False),
        sa.Column("registration_no", sa.String(20), nullable=True),
        sa.Column("colour", sa.String(30), nullable=False),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("purchase_price", sa.Float(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("current_rider_id", sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("engine_no"),
        sa.Index("ix_bikes_make", "make"),
        sa.Index("ix_bikes_chassis_no", "chassis_no", unique=True),
        sa.Index("ix_bikes_registration_no", "registration_no", unique=True),
        sa.Index("ix_bikes_status", "status"),
        sa.Index("ix_bikes_created_at", "created_at"),
    )

    # Create financed_riders table
    op.create_table(
        "financed_riders",
        sa.Column("id", sa.String(36), nullable=False),
        *_personal_columns(),
        sa.Column("id_number", sa.String(8), nullable=False),
        sa.Column("residential_area", sa.String(200), nullable=False),
        sa.Column("operation_slot", sa.String(20), nullable=False),
        sa.Column("operation_slot_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("referee_name", sa.String(100), nullable=True),
        sa.Column("referee_id", sa.String(20), nullable=True),
        sa.Column("referee_phone", sa.String(20), nullable=True),
        sa.Column("next_of_kin_name", sa.String(100), nullable=False),
        sa.Column("next_of_kin_id", sa.String(20), nullable=False),
        sa.Column("next_of_kin_phone", sa.String(20), nullable=False),
        sa.Column("next_of_kin_relationship", sa.String(50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("daily_remittance", sa.Float(), nullable=False),
        sa.Column("total_investment", sa.Float(), nullable=False),
        sa.Column("expected_operation_days", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("bike_id", sa.String(36), sa.ForeignKey("bikes.id"), nullable=True),
        sa.Column("potential_rider_id", sa.String(36), sa.ForeignKey("potential_riders.id"), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.id"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_financed_riders_full_name", "full_name"),
        sa.Index("ix_financed_riders_id_number", "id_number"),
        sa.Index("ix_financed_riders_start_date", "start_date"),
        sa.Index("ix_financed_riders_status", "status"),
        sa.Index("ix_financed_riders_bike_id", "bike_id"),
        sa.Index("ix_financed_riders_created_at", "created_at"),
    )

    op.create_foreign_key("fk_bikes_current_rider", "bikes", "financed_riders", ["current_rider_id"], ["id"])

    # Create payments table
    op.create_table(
        "payments",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("rider_id", sa.String(36), sa.ForeignKey("financed_riders.id"), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("transaction_reference", sa.String(100), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.id"), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_payments_rider_id", "rider_id"),
        sa.Index("ix_payments_payment_date", "payment_date"),
        sa.Index("ix_payments_status", "status"),
        sa.Index("ix_payments_transaction_reference", "transaction_reference"),
        sa.Index("ix_payments_created_at", "created_at"),
    )

    # Create business_expenses table
    op.create_table(
        "business_expenses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=False),
        sa.Column("reference_no", sa.String(50), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_business_expenses_category", "category"),
        sa.Index("ix_business_expenses_expense_date", "expense_date"),
        sa.Index("ix_business_expenses_created_at", "created_at"),
    )

    # Create journal_entries table
    op.create_table(
        "journal_entries",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("transaction_type", sa.String(30), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("from_account", sa.String(100), nullable=True),
        sa.Column("to_account", sa.String(100), nullable=True),
        sa.Column("reference_no", sa.String(50), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("profiles.id"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_journal_entries_transaction_type", "transaction_type"),
        sa.Index("ix_journal_entries_transaction_date", "transaction_date"),
        sa.Index("ix_journal_entries_created_at", "created_at"),
    )

    # Create sms_notifications table
    op.create_table(
        "sms_notifications",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("rider_id", sa.String(36), sa.ForeignKey("financed_riders.id"), nullable=True),
        sa.Column("recipient_phone", sa.String(20), nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("message_type", sa.String(40), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error_message", sa.String(500), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_sms_notifications_rider_id", "rider_id"),
        sa.Index("ix_sms_notifications_message_type", "message_type"),
        sa.Index("ix_sms_notifications_status", "status"),
        sa.Index("ix_sms_notifications_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("sms_notifications")
    op.drop_table("journal_entries")
    op.drop_table("business_expenses")
    op.drop_table("payments")
    op.drop_constraint("fk_bikes_current_rider", "bikes", type_="foreignkey")
    op.drop_table("financed_riders")
    op.drop_table("bikes")
    op.drop_table("potential_riders")
    op.drop_table("auth_sessions")
    op.drop_table("profiles")
