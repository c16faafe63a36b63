"""initial budget ledger tables

Revision ID: a1f3c9d2e7b4
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1f3c9d2e7b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_columns():
    """Общие колонки всех сущностей: порядок вставки, id, версия строки, метки времени"""
    return [
        sa.Column('seq', sa.Integer(), primary_key=True),
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('row_version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _money(name, nullable=False):
    return sa.Column(name, sa.Numeric(15, 2), nullable=nullable)


def _create_entity_table(name, *columns):
    op.create_table(name, *_entity_columns(), *columns)
    op.create_index(f'ix_{name}_id', name, ['id'], unique=True)


def upgrade() -> None:
    _create_entity_table(
        'clients',
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('client_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(64), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_clients_company', 'clients', ['company'])

    _create_entity_table(
        'pocs',
        sa.Column('client', sa.String(36), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(64), nullable=False),
        sa.Column('designation', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_pocs_client', 'pocs', ['client'])

    _create_entity_table(
        'projects',
        sa.Column('project_name', sa.String(255), nullable=False),
        sa.Column('code', sa.String(64), nullable=False),
        sa.Column('client', sa.String(36), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('poc', sa.String(36), sa.ForeignKey('pocs.id'), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('type', sa.String(30), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_projects_code', 'projects', ['code'])
    op.create_index('ix_projects_client', 'projects', ['client'])
    op.create_index('ix_projects_poc', 'projects', ['poc'])

    _create_entity_table(
        'estimations',
        sa.Column('project', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('version', sa.String(50), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('provider', sa.String(255), nullable=False),
        sa.Column('review_date', sa.Date(), nullable=True),
        sa.Column('client_review_date', sa.Date(), nullable=True),
        _money('development_amount'),
        _money('testing_amount'),
        _money('project_management_amount'),
        _money('total_amount'),
        sa.Column('approval_status', sa.String(20), nullable=False),
        sa.Column('po_status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_estimations_project', 'estimations', ['project'])

    _create_entity_table(
        'payments',
        sa.Column('project', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('payment_type', sa.String(30), nullable=False),
        sa.Column('resource', sa.String(255), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        _money('approved_budget'),
        _money('additional_amount'),
        _money('payout'),
        _money('retention'),
        _money('penalty'),
        sa.Column('utilization_percentage', sa.Numeric(5, 2), nullable=False),
        sa.Column('is_exceeded', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_payments_project', 'payments', ['project'])

    _create_entity_table(
        'milestones',
        sa.Column('payment', sa.String(36), sa.ForeignKey('payments.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        _money('amount'),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('completion_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_milestones_payment', 'milestones', ['payment'])

    _create_entity_table(
        'additional_requests',
        sa.Column('project', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        _money('requested_amount'),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('approved_by', sa.String(255), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
    )
    op.create_index('ix_additional_requests_project', 'additional_requests', ['project'])

    _create_entity_table(
        'holds',
        sa.Column('project', sa.String(36), sa.ForeignKey('projects.id'), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        _money('amount'),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('released_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_holds_project', 'holds', ['project'])


def downgrade() -> None:
    # Дочерние таблицы удаляются раньше родительских
    for table in ('holds', 'additional_requests', 'milestones', 'payments', 'estimations', 'projects', 'pocs', 'clients'):
        op.drop_table(table)
