# backend/alembic/versions/0001_studio_booking_schema.py
"""Studio booking schema - studios, customers, children, slots, bookings, invites

Revision ID: 0001_studio_booking_schema
Revises:
Create Date: 2025-09-01 00:00:00.000000

Every child row cascades from its owner: deleting a studio removes its
customers, slots and invites; deleting a customer removes its children,
bookings and invites; deleting a child or a slot removes its bookings.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_studio_booking_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ulid_pk() -> sa.Column:
    return sa.Column("id", sa.String(26), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
    )


def upgrade() -> None:
    op.create_table(
        "studios",
        _ulid_pk(),
        sa.Column("slug", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False, server_default="Asia/Jerusalem"),
        sa.Column("currency", sa.CHAR(3), nullable=False, server_default="ILS"),
        _created_at(),
    )
    op.create_index("ix_studios_slug", "studios", ["slug"], unique=True)

    op.create_table(
        "customers",
        _ulid_pk(),
        sa.Column(
            "studio_id",
            sa.String(26),
            sa.ForeignKey("studios.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("avatar_key", sa.String(100), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        _created_at(),
    )
    op.create_index("ix_customers_studio_id", "customers", ["studio_id"])
    op.create_index("ix_customers_studio_email", "customers", ["studio_id", "contact_email"])
    op.create_index("ix_customers_studio_phone", "customers", ["studio_id", "contact_phone"])

    op.create_table(
        "children",
        _ulid_pk(),
        sa.Column(
            "customer_id",
            sa.String(26),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("avatar_key", sa.String(100), nullable=False),
        _created_at(),
    )
    op.create_index("ix_children_customer_id", "children", ["customer_id"])

    op.create_table(
        "slots",
        _ulid_pk(),
        sa.Column(
            "studio_id",
            sa.String(26),
            sa.ForeignKey("studios.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_min", sa.Integer(), nullable=False),
        sa.Column("recurrence_rule", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("min_participants", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("for_children", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        sa.CheckConstraint(
            "duration_min > 0 AND duration_min <= 1440", name="ck_slots_duration"
        ),
        sa.CheckConstraint("min_participants >= 0", name="ck_slots_min_non_negative"),
        sa.CheckConstraint("max_participants >= 1", name="ck_slots_max_positive"),
        sa.CheckConstraint("min_participants <= max_participants", name="ck_slots_min_le_max"),
        sa.CheckConstraint("price >= 0", name="ck_slots_price_non_negative"),
    )
    op.create_index("ix_slots_studio_id", "slots", ["studio_id"])
    op.create_index("ix_slots_starts_at", "slots", ["starts_at"])

    op.create_table(
        "bookings",
        _ulid_pk(),
        sa.Column(
            "slot_id",
            sa.String(26),
            sa.ForeignKey("slots.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.String(26),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "child_id",
            sa.String(26),
            sa.ForeignKey("children.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="CONFIRMED"),
        _created_at(),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_method", sa.String(20), nullable=True),
        sa.CheckConstraint(
            "(customer_id IS NOT NULL AND child_id IS NULL) "
            "OR (customer_id IS NULL AND child_id IS NOT NULL)",
            name="one_party",
        ),
        sa.CheckConstraint(
            "status IN ('CONFIRMED', 'CANCELLED', 'NO_SHOW')", name="ck_bookings_status"
        ),
        sa.CheckConstraint(
            "paid_method IS NULL OR paid_method IN ('cash', 'bit', 'paybox', 'transfer')",
            name="ck_bookings_paid_method",
        ),
    )
    op.create_index("ix_bookings_slot_id", "bookings", ["slot_id"])
    op.create_index("ix_bookings_customer_id", "bookings", ["customer_id"])
    op.create_index("ix_bookings_child_id", "bookings", ["child_id"])
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"])

    op.create_table(
        "invites",
        _ulid_pk(),
        sa.Column(
            "studio_id",
            sa.String(26),
            sa.ForeignKey("studios.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.String(26),
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("short_hash", sa.String(32), nullable=False),
        _created_at(),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_invites_studio_id", "invites", ["studio_id"])
    op.create_index("ix_invites_customer_id", "invites", ["customer_id"])
    op.create_index("ix_invites_short_hash", "invites", ["short_hash"], unique=True)


def downgrade() -> None:
    op.drop_table("invites")
    op.drop_table("bookings")
    op.drop_table("slots")
    op.drop_table("children")
    op.drop_table("customers")
    op.drop_table("studios")
