"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2025-12-02

Creates the tables for Hello World! Tube and its Networks feature:
users, videos, networks, network_memberships, network_invitations,
network_applications.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

membership_role = sa.Enum("owner", "member", name="membershiprole")
membership_status = sa.Enum("active", name="membershipstatus")
invitation_status = sa.Enum("pending", "accepted", "rejected", name="invitationstatus")
application_status = sa.Enum("pending", "approved", "rejected", name="applicationstatus")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("social_links", sa.JSON, nullable=True),
        sa.Column("is_public_profile", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- videos ---
    op.create_table(
        "videos",
        sa.Column("video_id", sa.String(36), primary_key=True),
        sa.Column(
            "uploader_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False, index=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("filename", sa.String(512), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- networks ---
    op.create_table(
        "networks",
        sa.Column("network_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("themes", sa.JSON, nullable=False),
        sa.Column("logo_url", sa.String(2048), nullable=True),
        sa.Column("owner_id", sa.String(36), sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- network_memberships ---
    op.create_table(
        "network_memberships",
        sa.Column(
            "network_id", sa.String(36),
            sa.ForeignKey("networks.network_id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id", ondelete="RESTRICT"), primary_key=True),
        sa.Column("role", membership_role, nullable=False, server_default="member"),
        sa.Column("status", membership_status, nullable=False, server_default="active"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # --- network_invitations ---
    op.create_table(
        "network_invitations",
        sa.Column("invitation_id", sa.String(36), primary_key=True),
        sa.Column(
            "network_id", sa.String(36),
            sa.ForeignKey("networks.network_id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "invited_user_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("inviter_id", sa.String(36), sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column("status", invitation_status, nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("network_id", "invited_user_id", name="uq_invitation_network_user"),
    )

    # --- network_applications ---
    op.create_table(
        "network_applications",
        sa.Column("application_id", sa.String(36), primary_key=True),
        sa.Column(
            "network_id", sa.String(36),
            sa.ForeignKey("networks.network_id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "applicant_id", sa.String(36),
            sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("message", sa.String(500), nullable=True),
        sa.Column("status", application_status, nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("network_id", "applicant_id", name="uq_application_network_user"),
    )


def downgrade() -> None:
    op.drop_table("network_applications")
    op.drop_table("network_invitations")
    op.drop_table("network_memberships")
    op.drop_table("networks")
    op.drop_table("videos")
    op.drop_table("users")
    for enum_type in (application_status, invitation_status, membership_status, membership_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
