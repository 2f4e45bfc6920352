"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('background', sa.Text(), nullable=False),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('banner_url', sa.String(length=500), nullable=True),
        sa.Column('about_image_url', sa.String(length=500), nullable=True),
        sa.Column('about_story', sa.Text(), nullable=True),
        sa.Column('about_offerings', sa.JSON(), nullable=True),
        sa.Column('contact_email', sa.String(length=255), nullable=False),
        sa.Column('social_links', sa.JSON(), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_organizations_slug', 'organizations', ['slug'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('organization_id', sa.String(length=32), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('full_description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('time', sa.String(length=50), nullable=False),
        sa.Column('duration', sa.String(length=100), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('price', sa.JSON(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('registration_required', sa.Boolean(), nullable=False),
        sa.Column('eventbrite_url', sa.String(length=500), nullable=True),
        sa.Column('presale_enabled', sa.Boolean(), nullable=True),
        sa.Column('series', sa.JSON(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False),
        sa.Column('recurring_dates', sa.JSON(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_events_organization_id', 'events', ['organization_id'])

    op.create_table(
        'registrations',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('event_id', sa.String(length=32), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('organization_id', sa.String(length=32), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('registration_type', sa.String(length=50), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('subscribe_to_updates', sa.Boolean(), nullable=False),
        sa.Column('subscribe_to_newsletter', sa.Boolean(), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=True),
        sa.Column('waitlist_position', sa.Integer(), nullable=True),
        sa.Column('source', sa.String(length=50), nullable=False),
        sa.Column('email_sent', sa.Boolean(), nullable=False),
        sa.Column('last_email_sent', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('event_id', 'waitlist_position', name='uq_registration_event_waitlist_position'),
        sa.UniqueConstraint('event_id', 'sequence', name='uq_registration_event_sequence'),
    )
    op.create_index('ix_registrations_event_id', 'registrations', ['event_id'])
    op.create_index('ix_registrations_organization_id', 'registrations', ['organization_id'])

    op.create_table(
        'waitlist_counters',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('event_id', sa.String(length=32), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('last_position', sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'manual_sales',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('event_id', sa.String(length=32), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.Column('updated_by', sa.String(length=255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'referral_answers',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('registration_id', sa.String(length=32), sa.ForeignKey('registrations.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('source', sa.String(length=50), nullable=False),
        sa.Column('other_details', sa.Text(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('referral_answers')
    op.drop_table('manual_sales')
    op.drop_table('waitlist_counters')
    op.drop_index('ix_registrations_organization_id', table_name='registrations')
    op.drop_index('ix_registrations_event_id', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('ix_events_organization_id', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_organizations_slug', table_name='organizations')
    op.drop_table('organizations')
