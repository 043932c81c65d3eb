"""Create pessoas, perfis and chamados tables

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-18 10:12:41.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'pessoas',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.Text(), nullable=False),
        sa.Column('cpf', sa.String(length=11), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('senha', sa.Text(), nullable=False),
        sa.Column('tipo', sa.String(length=10), nullable=False),
        sa.Column('data_criacao', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pessoas')),
        sa.UniqueConstraint('cpf', name=op.f('uq_pessoas_cpf')),
        sa.UniqueConstraint('email', name=op.f('uq_pessoas_email')),
    )
    op.create_index(op.f('ix_pessoas_tipo'), 'pessoas', ['tipo'], unique=False)

    op.create_table(
        'perfis',
        sa.Column('pessoa_id', sa.Integer(), nullable=False),
        sa.Column('perfil', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['pessoa_id'], ['pessoas.id'], name=op.f('fk_perfis_pessoa_id_pessoas'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('pessoa_id', 'perfil', name=op.f('pk_perfis')),
    )

    op.create_table(
        'chamados',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('data_abertura', sa.Date(), nullable=False),
        sa.Column('data_fechamento', sa.Date(), nullable=True),
        sa.Column('prioridade', sa.Integer(), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False),
        sa.Column('titulo', sa.Text(), nullable=False),
        sa.Column('observacoes', sa.Text(), nullable=False),
        sa.Column('tecnico_id', sa.Integer(), nullable=False),
        sa.Column('cliente_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['cliente_id'], ['pessoas.id'], name=op.f('fk_chamados_cliente_id_pessoas')),
        sa.ForeignKeyConstraint(['tecnico_id'], ['pessoas.id'], name=op.f('fk_chamados_tecnico_id_pessoas')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_chamados')),
    )
    op.create_index(op.f('ix_chamados_status'), 'chamados', ['status'], unique=False)
    op.create_index(op.f('ix_chamados_tecnico_id'), 'chamados', ['tecnico_id'], unique=False)
    op.create_index(op.f('ix_chamados_cliente_id'), 'chamados', ['cliente_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_chamados_cliente_id'), table_name='chamados')
    op.drop_index(op.f('ix_chamados_tecnico_id'), table_name='chamados')
    op.drop_index(op.f('ix_chamados_status'), table_name='chamados')
    op.drop_table('chamados')
    op.drop_table('perfis')
    op.drop_index(op.f('ix_pessoas_tipo'), table_name='pessoas')
    op.drop_table('pessoas')
