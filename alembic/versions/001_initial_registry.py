"""Initial migration: registry tables, candidate lookups and users.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CANDIDATE_TABLES = ("congressman", "governor", "vice_governor", "mayor")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "barangays",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("barangay", sa.String(45), nullable=True),
        sa.Column("municipality", sa.String(45), nullable=True),
        sa.Column("district", sa.Integer, nullable=True),
        sa.Column("households", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_barangays"),
    )
    op.create_index("ix_barangays_barangay", "barangays", ["barangay"])
    op.create_index("ix_barangays_municipality", "barangays", ["municipality"])

    # Voter roll
    op.create_table(
        "v_info",
        sa.Column("v_id", sa.Integer, autoincrement=True),
        sa.Column("barangayId", sa.Integer, nullable=True),
        sa.Column("v_precinct_no", sa.String(45), nullable=True),
        sa.Column("v_lname", sa.String(145), nullable=True),
        sa.Column("v_fname", sa.String(145), nullable=True),
        sa.Column("v_mname", sa.String(45), nullable=True),
        sa.Column("v_birthday", sa.Date, nullable=True),
        sa.Column("v_gender", sa.String(15), nullable=True),
        sa.Column("record_type", sa.SmallInteger, nullable=True),
        sa.Column("v_idx", sa.String(45), nullable=False),
        sa.Column("v_mobile_phone", sa.String(45), nullable=True),
        sa.Column("date_recorded", sa.DateTime, nullable=True),
        sa.PrimaryKeyConstraint("v_id", name="pk_v_info"),
    )
    op.create_index("ix_v_info_barangayId", "v_info", ["barangayId"])
    op.create_index("ix_v_info_v_lname", "v_info", ["v_lname"])

    # Households and their members
    op.create_table(
        "head_household",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("fh_v_id", sa.Integer, nullable=True),
        sa.Column("date_saved", sa.DateTime, nullable=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("leader_v_id", sa.Integer, nullable=True),
        sa.Column("purok_st", sa.String(245), nullable=True),
        sa.Column("verification_status", sa.String(20), nullable=True),
        sa.Column("is_printed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_Received", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name="pk_head_household"),
    )
    op.create_index("ix_head_household_fh_v_id", "head_household", ["fh_v_id"])
    op.create_index("ix_head_household_leader_v_id", "head_household", ["leader_v_id"])

    op.create_table(
        "household_warding",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("fh_v_id", sa.Integer, nullable=True),
        sa.Column("mem_v_id", sa.Integer, nullable=True),
        sa.Column("date_saved", sa.DateTime, nullable=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_household_warding"),
    )
    op.create_index("ix_household_warding_fh_v_id", "household_warding", ["fh_v_id"])
    op.create_index("ix_household_warding_mem_v_id", "household_warding", ["mem_v_id"])

    # Leader assignments
    op.create_table(
        "leaders",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("v_id", sa.Integer, nullable=False),
        sa.Column("type", sa.Integer, nullable=True),
        sa.Column("electionyear", sa.Integer, nullable=True),
        sa.Column("dateadded", sa.DateTime, nullable=True),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("status", sa.Integer, nullable=True),
        sa.Column("laynes", sa.Integer, nullable=True),
        sa.Column("is_printed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_Received", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name="pk_leaders"),
    )
    op.create_index("ix_leaders_v_id", "leaders", ["v_id"])
    op.create_index("ix_leaders_type", "leaders", ["type"])

    # Preferences and candidate lookups
    op.create_table(
        "politics",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("v_id", sa.Integer, nullable=True),
        sa.Column("congressman", sa.Integer, nullable=True),
        sa.Column("governor", sa.Integer, nullable=True),
        sa.Column("vicegov", sa.Integer, nullable=True),
        sa.Column("mayor", sa.Integer, nullable=True),
        sa.Column("op", sa.Integer, nullable=True),
        sa.Column("na", sa.Integer, nullable=True),
        sa.Column("status", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_politics"),
    )
    op.create_index("ix_politics_v_id", "politics", ["v_id"])

    for table in CANDIDATE_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.Integer, autoincrement=True),
            sa.Column("FirstName", sa.String(255), nullable=True),
            sa.Column("LastName", sa.String(255), nullable=True),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
        )


def downgrade() -> None:
    for table in reversed(CANDIDATE_TABLES):
        op.drop_table(table)
    op.drop_table("politics")
    op.drop_table("leaders")
    op.drop_table("household_warding")
    op.drop_table("head_household")
    op.drop_table("v_info")
    op.drop_table("barangays")
    op.drop_table("users")
