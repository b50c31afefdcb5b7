from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("email", sa.String(255), nullable=False, index=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="operator"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_table(
        "movement_records",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("member", sa.String(255), nullable=False, index=True),
        sa.Column("date", sa.Date(), nullable=False, index=True),
        sa.Column("entries", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("exits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("balance", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_kg", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("price_per_kg", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("freight_cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("commission", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("animal_value", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("total", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_table(
        "exit_details",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("movement_record_id", sa.Integer(), nullable=False, index=True),
        sa.Column("member", sa.String(255), nullable=False, index=True),
        sa.Column("date", sa.Date(), nullable=False, index=True),
        sa.Column("cause", sa.String(20), nullable=False, index=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("price_per_kg", sa.Numeric(12, 2), nullable=True),
        sa.Column("total_kg", sa.Numeric(12, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["movement_record_id"], ["movement_records.id"], ondelete="CASCADE"),
        sa.CheckConstraint("cause IN ('sale', 'death', 'theft')", name="ck_exit_details_cause"),
    )


def downgrade() -> None:
    op.drop_table("exit_details")
    op.drop_table("movement_records")
    op.drop_table("users")
