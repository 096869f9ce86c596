"""initial schema: units, users, items, requisitions, printers, supplies, maintenance

Revision ID: 5b1f0c2a9d47
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5b1f0c2a9d47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def upgrade() -> None:
    # --- UNITS ---
    op.create_table(
        "units",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=True),
        sa.Column("campus", sa.String(length=128), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_units")),
        sa.UniqueConstraint("name", name=op.f("uq_units_name")),
    )

    # --- USERS ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_users_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("username", name=op.f("uq_users_username")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_index(op.f("ix_users_unit_id"), "users", ["unit_id"], unique=False)

    # --- ITEMS ---
    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sipac_code", sa.String(length=64), nullable=True),
        sa.Column("tender", sa.String(length=64), nullable=True),
        sa.Column("description", sa.String(length=512), nullable=False),
        sa.Column("item_type", sa.String(length=64), nullable=True),
        sa.Column("measure_unit", sa.String(length=32), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("quantity", sa.Integer(), server_default="0", nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), server_default="0", nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_items_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_items")),
    )
    op.create_index(op.f("ix_items_unit_id"), "items", ["unit_id"], unique=False)

    # --- REQUISITIONS ---
    op.create_table(
        "requisitions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("requester_id", sa.Integer(), nullable=False),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=False),
        sa.Column("sector", sa.String(length=255), nullable=True),
        sa.Column("ticket_number", sa.String(length=64), nullable=True),
        sa.Column("asset_tag", sa.String(length=64), nullable=True),
        sa.Column("status", sa.String(length=32), server_default="pending", nullable=False),
        _created_at("requested_at"),
        sa.ForeignKeyConstraint(
            ["requester_id"], ["users.id"], name=op.f("fk_requisitions_requester_id_users"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["users.id"], name=op.f("fk_requisitions_technician_id_users"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_requisitions_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_requisitions")),
    )
    for col in ("requester_id", "technician_id", "unit_id", "status", "requested_at"):
        op.create_index(op.f(f"ix_requisitions_{col}"), "requisitions", [col], unique=False)

    op.create_table(
        "requisition_lines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("requisition_id", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("quantity_requested", sa.Integer(), nullable=False),
        sa.Column("delivery_status", sa.String(length=32), server_default="pending", nullable=False),
        sa.Column("delivered_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["requisition_id"],
            ["requisitions.id"],
            name=op.f("fk_requisition_lines_requisition_id_requisitions"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["item_id"], ["items.id"], name=op.f("fk_requisition_lines_item_id_items"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_requisition_lines")),
    )
    op.create_index(op.f("ix_requisition_lines_requisition_id"), "requisition_lines", ["requisition_id"], unique=False)
    op.create_index(op.f("ix_requisition_lines_item_id"), "requisition_lines", ["item_id"], unique=False)

    # --- MAINTENANCE ---
    op.create_table(
        "maintenance_tickets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("ticket_number", sa.String(length=64), nullable=True),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("equipment", sa.String(length=255), nullable=False),
        sa.Column("problem_description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), server_default="pending", nullable=False),
        sa.Column("technical_report", sa.Text(), nullable=True),
        _created_at("received_at"),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["users.id"], name=op.f("fk_maintenance_tickets_technician_id_users"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_maintenance_tickets")),
    )
    for col in ("technician_id", "status", "received_at"):
        op.create_index(op.f(f"ix_maintenance_tickets_{col}"), "maintenance_tickets", [col], unique=False)

    # --- PRINTERS ---
    op.create_table(
        "printers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("serial_number", sa.String(length=128), nullable=False),
        sa.Column("ip", sa.String(length=64), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("model", sa.String(length=128), nullable=True),
        sa.Column("unit_id", sa.Integer(), nullable=True),
        sa.Column("policies_applied", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_printers_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_printers")),
    )
    for col in ("serial_number", "ip", "unit_id", "active"):
        op.create_index(op.f(f"ix_printers_{col}"), "printers", [col], unique=False)

    op.create_table(
        "printer_services",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("printer_id", sa.Integer(), nullable=False),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=True),
        sa.Column("ticket_number", sa.String(length=64), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        _created_at("served_at"),
        sa.ForeignKeyConstraint(
            ["printer_id"], ["printers.id"], name=op.f("fk_printer_services_printer_id_printers"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["users.id"], name=op.f("fk_printer_services_technician_id_users"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_printer_services_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_printer_services")),
    )
    for col in ("printer_id", "technician_id", "served_at"):
        op.create_index(op.f(f"ix_printer_services_{col}"), "printer_services", [col], unique=False)

    # --- SUPPLIES ---
    op.create_table(
        "supply_stock",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("imaging_unit_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("black_toner_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("cyan_toner_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("magenta_toner_total", sa.Integer(), server_default="0", nullable=False),
        sa.Column("yellow_toner_total", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_supply_stock")),
    )

    op.create_table(
        "supply_consumptions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("printer_id", sa.Integer(), nullable=True),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("unit_id", sa.Integer(), nullable=True),
        sa.Column("ticket_number", sa.String(length=64), nullable=True),
        sa.Column("imaging_unit_requested", sa.Integer(), server_default="0", nullable=False),
        sa.Column("black_toner_requested", sa.Integer(), server_default="0", nullable=False),
        sa.Column("cyan_toner_requested", sa.Integer(), server_default="0", nullable=False),
        sa.Column("magenta_toner_requested", sa.Integer(), server_default="0", nullable=False),
        sa.Column("yellow_toner_requested", sa.Integer(), server_default="0", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _created_at("consumed_at"),
        sa.ForeignKeyConstraint(
            ["printer_id"], ["printers.id"], name=op.f("fk_supply_consumptions_printer_id_printers"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["technician_id"], ["users.id"], name=op.f("fk_supply_consumptions_technician_id_users"), ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["unit_id"], ["units.id"], name=op.f("fk_supply_consumptions_unit_id_units"), ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_supply_consumptions")),
    )
    for col in ("printer_id", "technician_id", "consumed_at"):
        op.create_index(op.f(f"ix_supply_consumptions_{col}"), "supply_consumptions", [col], unique=False)


def downgrade() -> None:
    # порядок важен: сначала зависимые
    op.drop_table("supply_consumptions")
    op.drop_table("supply_stock")
    op.drop_table("printer_services")
    op.drop_table("printers")
    op.drop_table("maintenance_tickets")
    op.drop_table("requisition_lines")
    op.drop_table("requisitions")
    op.drop_table("items")
    op.drop_table("users")
    op.drop_table("units")
