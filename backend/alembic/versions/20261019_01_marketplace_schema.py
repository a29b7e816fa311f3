"""marketplace schema: profiles, jobs, applications, invitations, engagements, messaging, notifications

Revision ID: 20261019_01_marketplace
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_01_marketplace"
down_revision = None
branch_labels = None
depends_on = None

UUID = postgresql.UUID(as_uuid=True)
JSONB = postgresql.JSONB(astext_type=sa.Text())


def _ts(name, nullable=False):
    if nullable:
        return sa.Column(name, sa.DateTime(timezone=True), nullable=True)
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def upgrade():
    op.create_table(
        "profiles",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(256), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("account_status", sa.String(32), nullable=False, server_default="active"),
        _ts("verification_sent_at", True),
        _ts("first_reminder_sent_at", True),
        _ts("second_reminder_sent_at", True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("cover_image_url", sa.Text(), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("linkedin", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("languages", JSONB, nullable=True),
        sa.Column("expertise", JSONB, nullable=True),
        sa.Column("industries", JSONB, nullable=True),
        sa.Column("skills", JSONB, nullable=True),
        sa.Column("specializations", JSONB, nullable=True),
        sa.Column("certifications", JSONB, nullable=True),
        sa.Column("regions", JSONB, nullable=True),
        sa.Column("portfolio_links", JSONB, nullable=True),
        sa.Column("availability", sa.String(32), nullable=True),
        sa.Column("years_experience", sa.Integer(), nullable=True),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("placement_fee_percent", sa.Float(), nullable=True),
        sa.Column("placements_count", sa.Integer(), nullable=True),
        sa.Column("rating_avg", sa.Float(), nullable=True),
        sa.Column("success_rate", sa.Float(), nullable=True),
        sa.Column("response_time_hours", sa.Float(), nullable=True),
        sa.Column("active_searches", sa.Integer(), nullable=True),
        sa.Column("company_name", sa.String(200), nullable=True),
        sa.Column("company_sector", sa.String(200), nullable=True),
        sa.Column("company_size", sa.String(64), nullable=True),
        sa.Column("company_hq", sa.String(200), nullable=True),
        sa.Column("company_mission", sa.Text(), nullable=True),
        sa.Column("company_culture", sa.Text(), nullable=True),
        sa.Column("company_benefits", JSONB, nullable=True),
        sa.Column("founded_year", sa.Integer(), nullable=True),
        sa.Column("open_positions", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(16), nullable=True, server_default="online"),
        sa.Column("show_status", sa.Boolean(), nullable=False, server_default=sa.true()),
        _ts("last_seen", True),
        sa.Column("show_ai_assistant", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )

    op.create_table(
        "jobs",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("job_id_number", sa.Integer(), nullable=False, unique=True),
        sa.Column("created_by", UUID, nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("company_name", sa.String(200), nullable=True),
        sa.Column("industry", sa.String(100), nullable=True),
        sa.Column("seniority", sa.String(32), nullable=True),
        sa.Column("employment_type", sa.String(32), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("remote_policy", sa.String(32), nullable=True),
        sa.Column("budget_currency", sa.String(8), nullable=True, server_default="ILS"),
        sa.Column("budget_min", sa.Float(), nullable=True),
        sa.Column("budget_max", sa.Float(), nullable=True),
        sa.Column("skills_must", JSONB, nullable=True),
        sa.Column("skills_nice", JSONB, nullable=True),
        sa.Column("benefits", JSONB, nullable=True),
        sa.Column("visibility", sa.String(16), nullable=False, server_default="public"),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending_review"),
        sa.Column("is_exclusive", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("exclusive_until", True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["created_by"], ["profiles.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_jobs_created_by", "jobs", ["created_by"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_created_at", "jobs", ["created_at"])

    op.create_table(
        "job_edit_history",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("job_id", UUID, nullable=False),
        sa.Column("edited_by", UUID, nullable=False),
        sa.Column("changes", JSONB, nullable=False),
        _ts("edited_at"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["edited_by"], ["profiles.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_job_edit_history_job_id", "job_edit_history", ["job_id"])

    op.create_table(
        "job_hold_history",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("job_id", UUID, nullable=False),
        sa.Column("created_by", UUID, nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        _ts("created_at"),
        _ts("resolved_at", True),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["profiles.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_job_hold_history_job_id", "job_hold_history", ["job_id"])

    op.create_table(
        "applications",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("job_id", UUID, nullable=False),
        sa.Column("headhunter_id", UUID, nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="submitted"),
        sa.Column("cover_note", sa.Text(), nullable=True),
        sa.Column("proposed_fee_model", sa.String(32), nullable=False),
        sa.Column("proposed_fee_value", sa.Float(), nullable=False),
        sa.Column("eta_days", sa.Integer(), nullable=False),
        _ts("created_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["headhunter_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("job_id", "headhunter_id", name="uq_application_job_headhunter"),
    )
    op.create_index("ix_applications_job_id", "applications", ["job_id"])
    op.create_index("ix_applications_headhunter_id", "applications", ["headhunter_id"])

    op.create_table(
        "job_invitations",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("job_id", UUID, nullable=False),
        sa.Column("employer_id", UUID, nullable=False),
        sa.Column("headhunter_id", UUID, nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("message", sa.Text(), nullable=True),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employer_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["headhunter_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("job_id", "headhunter_id", name="uq_job_invitation_job_headhunter"),
    )
    op.create_index("ix_job_invitations_headhunter_id", "job_invitations", ["headhunter_id"])

    op.create_table(
        "engagements",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("application_id", UUID, nullable=False, unique=True),
        sa.Column("job_id", UUID, nullable=False),
        sa.Column("employer_id", UUID, nullable=False),
        sa.Column("headhunter_id", UUID, nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="Proposed"),
        sa.Column("fee_model", sa.String(32), nullable=False),
        sa.Column("fee_amount", sa.Float(), nullable=False),
        sa.Column("sla_days", sa.Integer(), nullable=False),
        sa.Column("candidate_cap", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("deposit_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deposit_amount", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("sow_confirmed_employer", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sow_confirmed_headhunter", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("start_at", True),
        _ts("due_at", True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employer_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["headhunter_id"], ["profiles.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_engagements_employer_id", "engagements", ["employer_id"])
    op.create_index("ix_engagements_headhunter_id", "engagements", ["headhunter_id"])

    op.create_table(
        "submissions",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("engagement_id", UUID, nullable=False),
        sa.Column("candidate_name", sa.String(200), nullable=False),
        sa.Column("candidate_email", sa.String(320), nullable=True),
        sa.Column("candidate_phone", sa.String(64), nullable=True),
        sa.Column("cv_url", sa.Text(), nullable=True),
        sa.Column("salary_expectation", sa.String(100), nullable=True),
        sa.Column("notice_period", sa.String(100), nullable=True),
        sa.Column("right_to_work", sa.Boolean(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="New"),
        _ts("submitted_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["engagement_id"], ["engagements.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_submissions_engagement_id", "submissions", ["engagement_id"])

    op.create_table(
        "messages",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("from_user", UUID, nullable=False),
        sa.Column("to_user", UUID, nullable=False),
        sa.Column("job_id", UUID, nullable=True),
        sa.Column("engagement_id", UUID, nullable=True),
        sa.Column("body", sa.Text(), nullable=False, server_default=""),
        sa.Column("attachments", JSONB, nullable=True),
        sa.Column("reply_to", UUID, nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("created_at"),
        _ts("edited_at", True),
        sa.ForeignKeyConstraint(["from_user"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_user"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["engagement_id"], ["engagements.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reply_to"], ["messages.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_messages_from_user", "messages", ["from_user"])
    op.create_index("ix_messages_to_user", "messages", ["to_user"])
    op.create_index("ix_messages_job_id", "messages", ["job_id"])
    op.create_index("ix_messages_created_at", "messages", ["created_at"])

    op.create_table(
        "starred_conversations",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("other_user_id", UUID, nullable=False),
        sa.Column("job_id", UUID, nullable=True),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["other_user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "other_user_id", "job_id", name="uq_starred_conversation"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("type", sa.String(64), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("payload", JSONB, nullable=True),
        sa.Column("related_id", UUID, nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "saved_jobs",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("job_id", UUID, nullable=False),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "job_id", name="uq_saved_job_user_job"),
    )
    op.create_index("ix_saved_jobs_user_id", "saved_jobs", ["user_id"])

    op.create_table(
        "saved_headhunters",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False),
        sa.Column("headhunter_id", UUID, nullable=False),
        _ts("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["headhunter_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "headhunter_id", name="uq_saved_headhunter_user_headhunter"),
    )
    op.create_index("ix_saved_headhunters_user_id", "saved_headhunters", ["user_id"])

    op.create_table(
        "subscriptions",
        sa.Column("id", UUID, primary_key=True),
        sa.Column("user_id", UUID, nullable=False, unique=True),
        sa.Column("plan_id", sa.String(32), nullable=False, server_default="free"),
        sa.Column("billing_cycle", sa.String(16), nullable=False, server_default="monthly"),
        sa.Column("credits_remaining", sa.Integer(), nullable=True),
        _ts("period_start"),
        _ts("created_at"),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE"),
    )


def downgrade():
    for table in (
        "subscriptions",
        "saved_headhunters",
        "saved_jobs",
        "notifications",
        "starred_conversations",
        "messages",
        "submissions",
        "engagements",
        "job_invitations",
        "applications",
        "job_hold_history",
        "job_edit_history",
        "jobs",
        "user_roles",
        "profiles",
    ):
        op.drop_table(table)
