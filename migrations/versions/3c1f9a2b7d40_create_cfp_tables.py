"""Create conference, program, email settings and cfp tables

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-10-16 12:00:00.000000

"""

# revision identifiers, used by Alembic.
revision = '3c1f9a2b7d40'
down_revision = None

from alembic import op
import sqlalchemy as sa


def upgrade():
    op.create_table('conference',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('short_title', sa.String(), nullable=False),
    sa.Column('title', sa.String(), nullable=False),
    sa.Column('start_date', sa.Date(), nullable=False),
    sa.Column('end_date', sa.Date(), nullable=False),
    sa.Column('timezone', sa.String(), nullable=False),
    sa.Column('contact_email', sa.String(), nullable=True),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_conference')),
    sa.UniqueConstraint('short_title', name=op.f('uq_conference_short_title'))
    )
    op.create_table('program',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('conference_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['conference_id'], ['conference.id'], name=op.f('fk_program_conference_id_conference')),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_program')),
    sa.UniqueConstraint('conference_id', name=op.f('uq_program_conference_id'))
    )
    op.create_table('email_settings',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('conference_id', sa.Integer(), nullable=False),
    sa.Column('send_on_cfp_dates_updated', sa.Boolean(), nullable=False),
    sa.Column('cfp_dates_updated_subject', sa.String(), nullable=False),
    sa.Column('cfp_dates_updated_body', sa.String(), nullable=False),
    sa.ForeignKeyConstraint(['conference_id'], ['conference.id'], name=op.f('fk_email_settings_conference_id_conference')),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_email_settings')),
    sa.UniqueConstraint('conference_id', name=op.f('uq_email_settings_conference_id'))
    )
    op.create_table('cfp',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('program_id', sa.Integer(), nullable=False),
    sa.Column('cfp_type', sa.String(), nullable=False),
    sa.Column('description', sa.String(), nullable=True),
    sa.Column('start_date', sa.Date(), nullable=False),
    sa.Column('end_date', sa.Date(), nullable=False),
    sa.ForeignKeyConstraint(['program_id'], ['program.id'], name=op.f('fk_cfp_program_id_program')),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_cfp')),
    sa.UniqueConstraint('program_id', 'cfp_type', name=op.f('uq_cfp_program_id'))
    )


def downgrade():
    op.drop_table('cfp')
    op.drop_table('email_settings')
    op.drop_table('program')
    op.drop_table('conference')
