"""create_activity_log_table

Revision ID: 5e6f7a8b9c0d
Revises: 4d5e6f7a8b9c
Create Date: 2026-10-17 09:20:00

"""
from typing import Sequence, Union

from alembic import op

revision: str = '5e6f7a8b9c0d'
down_revision: Union[str, None] = '4d5e6f7a8b9c'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # project_id and entity_id carry no foreign keys: entries outlive their subjects
    op.execute("""
        CREATE TABLE activity_log (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            action VARCHAR(20) NOT NULL
                CHECK (action IN ('create', 'update', 'delete', 'comment', 'assign', 'status-change')),
            entity_type VARCHAR(20) NOT NULL
                CHECK (entity_type IN ('project', 'task', 'comment', 'user')),
            entity_id UUID NOT NULL,
            description TEXT,
            old_values JSONB,
            new_values JSONB,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            project_id UUID,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("CREATE INDEX idx_activity_log_project_created ON activity_log(project_id, created_at)")
    op.execute("CREATE INDEX idx_activity_log_user_created ON activity_log(user_id, created_at)")
    op.execute("CREATE INDEX ix_activity_log_created_at ON activity_log(created_at)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS activity_log")
