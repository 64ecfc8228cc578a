"""create_tasks_table

Revision ID: 3c4d5e6f7a8b
Revises: 2b3c4d5e6f7a
Create Date: 2026-10-17 09:10:00

"""
from typing import Sequence, Union

from alembic import op

revision: str = '3c4d5e6f7a8b'
down_revision: Union[str, None] = '2b3c4d5e6f7a'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE tasks (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(200) NOT NULL,
            description TEXT,
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            assigned_to_id UUID REFERENCES users(id) ON DELETE SET NULL,
            created_by_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status VARCHAR(20) NOT NULL DEFAULT 'todo'
                CHECK (status IN ('todo', 'in-progress', 'review', 'completed')),
            priority VARCHAR(20) NOT NULL DEFAULT 'medium'
                CHECK (priority IN ('low', 'medium', 'high', 'critical')),
            due_date TIMESTAMPTZ,
            tags JSONB NOT NULL DEFAULT '[]'::jsonb,
            estimated_hours DOUBLE PRECISION CHECK (estimated_hours >= 0),
            actual_hours DOUBLE PRECISION CHECK (actual_hours >= 0),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("CREATE INDEX ix_tasks_project_id ON tasks(project_id)")
    op.execute("CREATE INDEX ix_tasks_status ON tasks(status)")
    op.execute("CREATE INDEX ix_tasks_assigned_to_id ON tasks(assigned_to_id)")
    op.execute("CREATE INDEX ix_tasks_due_date ON tasks(due_date)")
    op.execute("CREATE INDEX ix_tasks_created_at ON tasks(created_at)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tasks")
