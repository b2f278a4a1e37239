"""initial schema: attendance, sales users, task bot, jobFms masters

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None

UNSIGNED_BIGINT = sa.BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql")
TASK_STATUS = sa.Enum("pending", "completed", "revised", "canceled", name="task_status")


def _timestamps(created: str = "created_at", updated: str = "updated_at") -> list[sa.Column]:
    return [
        sa.Column(created, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column(updated, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "TelegramUsers",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("chat_id", sa.BigInteger(), nullable=True),
        *_timestamps("createdAt", "updatedAt"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("chat_id", name="uq_telegram_users_chat_id"),
    )

    op.create_table(
        "users",
        sa.Column("id", UNSIGNED_BIGINT, autoincrement=True, nullable=False),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("name", sa.String(length=128), nullable=True),
        sa.Column("email", sa.String(length=128), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "Tasks",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("task", sa.String(length=255), nullable=False),
        sa.Column("doer", sa.String(length=255), nullable=False),
        sa.Column("urgency", sa.String(length=255), nullable=True),
        sa.Column("dueDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancellationRequested", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("cancellationReason", sa.Text(), nullable=True),
        sa.Column("status", TASK_STATUS, nullable=False, server_default="pending"),
        sa.Column("extensionRequestedDate", sa.DateTime(timezone=True), nullable=True),
        sa.Column("department", sa.String(length=255), nullable=True),
        *_timestamps("createdAt", "updatedAt"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_Tasks_createdAt", "Tasks", ["createdAt"], unique=False)

    op.create_table(
        "jobfms_paper_master",
        sa.Column("id", UNSIGNED_BIGINT, autoincrement=True, nullable=False),
        sa.Column("paper_name", sa.String(length=255), nullable=False),
        sa.Column("gsm", sa.Integer(), nullable=True),
        sa.Column("size_name", sa.String(length=255), nullable=False),
        sa.Column("width", sa.Float(), nullable=False),
        sa.Column("height", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=255), nullable=True, server_default="inches"),
        sa.Column("size_category", sa.String(length=255), nullable=True),
        sa.Column("rate_per_kg", sa.Float(), nullable=True),
        sa.Column("rate_per_sheet", sa.Float(), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # paper_id / paper_size_id are advisory references: no FK constraints.
    op.create_table(
        "jobfms_paper_calculation_master",
        sa.Column("id", UNSIGNED_BIGINT, autoincrement=True, nullable=False),
        sa.Column("paper_id", UNSIGNED_BIGINT, nullable=False),
        sa.Column("wastage_sheets", sa.Integer(), nullable=True, server_default="20"),
        sa.Column("cutting_pattern", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_jobfms_paper_calculation_master_paper_id",
        "jobfms_paper_calculation_master",
        ["paper_id"],
        unique=False,
    )

    op.create_table(
        "jobfms_ups_master",
        sa.Column("id", UNSIGNED_BIGINT, autoincrement=True, nullable=False),
        sa.Column("item_size_id", UNSIGNED_BIGINT, nullable=False),
        sa.Column("ups", sa.Integer(), nullable=False),
        sa.Column("paper_size_id", UNSIGNED_BIGINT, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_jobfms_ups_master_paper_size_id", "jobfms_ups_master", ["paper_size_id"], unique=False)

    op.create_table(
        "jobfms_enquiry_for_items",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("item", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("item", name="uq_jobfms_enquiry_for_items_item"),
    )


def downgrade() -> None:
    op.drop_table("jobfms_enquiry_for_items")
    op.drop_index("ix_jobfms_ups_master_paper_size_id", table_name="jobfms_ups_master")
    op.drop_table("jobfms_ups_master")
    op.drop_index("ix_jobfms_paper_calculation_master_paper_id", table_name="jobfms_paper_calculation_master")
    op.drop_table("jobfms_paper_calculation_master")
    op.drop_table("jobfms_paper_master")
    op.drop_index("ix_Tasks_createdAt", table_name="Tasks")
    op.drop_table("Tasks")
    TASK_STATUS.drop(op.get_bind(), checkfirst=True)
    op.drop_table("users")
    op.drop_table("TelegramUsers")
