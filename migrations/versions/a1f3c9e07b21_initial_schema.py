"""initial schema

Revision ID: a1f3c9e07b21
Revises:
Create Date: 2026-02-11 09:12:40.518311

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1f3c9e07b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=True),
    sa.Column('password', sa.String(length=255), nullable=True),
    sa.Column('first_name', sa.String(length=50), nullable=True),
    sa.Column('last_name', sa.String(length=50), nullable=True),
    sa.Column('phone', sa.String(length=20), nullable=True),
    sa.Column('date_of_birth', sa.Date(), nullable=True),
    sa.Column('auth_type', sa.String(length=20), nullable=False, server_default='email'),
    sa.Column('is_email_verified', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
    sa.Column('profile_image_url', sa.String(length=255), nullable=True),
    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('email')
    )
    op.create_table('attendee',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('parent_id', sa.String(length=36), nullable=False),
    sa.Column('first_name', sa.String(length=50), nullable=False),
    sa.Column('last_name', sa.String(length=50), nullable=False),
    sa.Column('date_of_birth', sa.Date(), nullable=False),
    sa.Column('secondary_contact', sa.Text(), nullable=False),
    sa.Column('gender', sa.String(length=20), nullable=True),
    sa.Column('dietary_restrictions', sa.Text(), nullable=True),
    sa.Column('allergies', sa.Text(), nullable=True),
    sa.Column('medicine_needs', sa.Text(), nullable=True),
    sa.Column('other_notes', sa.Text(), nullable=True),
    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['parent_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('events',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('type', sa.String(length=50), nullable=False, server_default='afterschool'),
    sa.Column('description', sa.Text(), nullable=False, server_default=''),
    sa.Column('start_time', sa.TIMESTAMP(timezone=True), nullable=False),
    sa.Column('duration', sa.String(length=20), nullable=False, server_default='5h'),
    sa.Column('location', sa.String(length=255), nullable=False),
    sa.Column('image', sa.String(length=500), nullable=True),
    sa.Column('max_seats', sa.Integer(), nullable=False, server_default='3'),
    sa.Column('remaining_seats', sa.Integer(), nullable=False, server_default='3'),
    sa.Column('credits_required', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('cutoff_hours', sa.Integer(), nullable=False, server_default='12'),
    sa.Column('extra_services', sa.JSON(), nullable=False, server_default='[]'),
    sa.Column('services_currency', sa.String(length=3), nullable=False, server_default='USD'),
    sa.Column('allowed_registrants', sa.String(length=20), nullable=False, server_default='attendee'),
    sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
    sa.Column('is_editing', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('deleted', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('max_seats > 0', name='ck_events_max_seats_positive'),
    sa.CheckConstraint('remaining_seats >= 0', name='ck_events_remaining_non_negative'),
    sa.CheckConstraint('remaining_seats <= max_seats', name='ck_events_remaining_le_max'),
    sa.CheckConstraint('credits_required >= 0', name='ck_events_credits_non_negative'),
    sa.CheckConstraint('cutoff_hours >= 0', name='ck_events_cutoff_non_negative'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_table('event_supervisors',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('event_id', sa.String(length=36), nullable=False),
    sa.Column('supervisor_id', sa.String(length=36), nullable=False),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['supervisor_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('event_id', 'supervisor_id', name='uq_event_supervisor')
    )
    op.create_table('event_registrations',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('event_id', sa.String(length=36), nullable=False),
    sa.Column('child_id', sa.String(length=36), nullable=True),
    sa.Column('parent_id', sa.String(length=36), nullable=False),
    sa.Column('selected_services', sa.JSON(), nullable=False, server_default='[]'),
    sa.Column('credits_cost', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('services_cost', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('registered_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['child_id'], ['attendee.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['parent_id'], ['users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    # One registration per child, and one self-registration per parent
    op.create_index('uq_registration_event_child', 'event_registrations', ['event_id', 'child_id'],
                    unique=True, postgresql_where=sa.text('child_id IS NOT NULL'))
    op.create_index('uq_registration_event_parent_self', 'event_registrations', ['event_id', 'parent_id'],
                    unique=True, postgresql_where=sa.text('child_id IS NULL'))


def downgrade():
    op.drop_index('uq_registration_event_parent_self', table_name='event_registrations')
    op.drop_index('uq_registration_event_child', table_name='event_registrations')
    op.drop_table('event_registrations')
    op.drop_table('event_supervisors')
    op.drop_table('events')
    op.drop_table('attendee')
    op.drop_table('users')
