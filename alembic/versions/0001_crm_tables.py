"""crm tables: customers, notes, email_logs, activity_logs

Revision ID: 0001_crm_tables
Revises:
Create Date: 2026-10-16
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_crm_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact_person", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("website", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("region", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("customer_type", sa.String(length=32), nullable=False, server_default="Other"),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="Lead"),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="Medium"),
        sa.Column("value_tier", sa.String(length=16), nullable=False, server_default="Standard"),
        sa.Column("direct_import", sa.String(length=16), nullable=False, server_default="No"),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("is_returning_customer", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_hot_lead", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_follow_up_date", sa.String(length=10), nullable=False, server_default=""),
        sa.Column("next_follow_up_date", sa.String(length=10), nullable=False, server_default=""),
        sa.Column("requirements", sa.Text(), nullable=False, server_default=""),
        sa.Column("last_contact_notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("key_meeting_points", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_customers_name", "customers", ["name"])
    op.create_index("ix_customers_country", "customers", ["country"])
    op.create_index("ix_customers_status", "customers", ["status"])
    op.create_index("ix_customers_next_follow_up_date", "customers", ["next_follow_up_date"])

    op.create_table(
        "notes",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("next_step", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_key", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_notes_customer_id", "notes", ["customer_id"])
    op.create_index("ix_notes_timestamp", "notes", ["timestamp"])

    op.create_table(
        "email_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sent_by", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("date", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_email_logs_customer_id", "email_logs", ["customer_id"])
    op.create_index("ix_email_logs_date", "email_logs", ["date"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), sa.ForeignKey("customers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("action", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_activity_logs_customer_id", "activity_logs", ["customer_id"])
    op.create_index("ix_activity_logs_timestamp", "activity_logs", ["timestamp"])


def downgrade() -> None:
    op.drop_table("activity_logs")
    op.drop_table("email_logs")
    op.drop_table("notes")
    op.drop_index("ix_customers_next_follow_up_date", table_name="customers")
    op.drop_index("ix_customers_status", table_name="customers")
    op.drop_index("ix_customers_country", table_name="customers")
    op.drop_index("ix_customers_name", table_name="customers")
    op.drop_table("customers")
