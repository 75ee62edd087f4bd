"""create lesson booking tables

Revision ID: a1b2c3d4e5f6
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'instructors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('specialization', sa.String(length=255), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('instructors', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_instructors_name'), ['name'], unique=False)

    op.create_table(
        'music_classes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('instructor_id', sa.Integer(), nullable=False),
        sa.Column('instrument', sa.String(length=80), nullable=False),
        sa.Column('level', sa.String(length=20), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['instructor_id'], ['instructors.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('music_classes', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_music_classes_instructor_id'), ['instructor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_music_classes_instrument'), ['instrument'], unique=False)
        batch_op.create_index(batch_op.f('ix_music_classes_scheduled_at'), ['scheduled_at'], unique=False)
        batch_op.create_index(batch_op.f('ix_music_classes_status'), ['status'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('music_class_id', sa.Integer(), nullable=False),
        sa.Column('student_name', sa.String(length=120), nullable=False),
        sa.Column('student_email', sa.String(length=255), nullable=False),
        sa.Column('student_phone', sa.String(length=30), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('booked_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['music_class_id'], ['music_classes.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_bookings_music_class_id'), ['music_class_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_bookings_booked_at'), ['booked_at'], unique=False)
        batch_op.create_index(
            'uq_booking_class_confirmed',
            ['music_class_id'],
            unique=True,
            sqlite_where=sa.text("status = 'CONFIRMED'"),
            postgresql_where=sa.text("status = 'CONFIRMED'"),
        )

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('view_mode', sa.String(length=20), nullable=True),
        sa.Column('instructor_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=80), nullable=False),
        sa.Column('entity', sa.String(length=80), nullable=True),
        sa.Column('entity_id', sa.String(length=80), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column('metadata_json', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('audit_logs')

    with op.batch_alter_table('bookings', schema=None) as batch_op:
        batch_op.drop_index('uq_booking_class_confirmed')
        batch_op.drop_index(batch_op.f('ix_bookings_booked_at'))
        batch_op.drop_index(batch_op.f('ix_bookings_music_class_id'))
    op.drop_table('bookings')

    with op.batch_alter_table('music_classes', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_music_classes_status'))
        batch_op.drop_index(batch_op.f('ix_music_classes_scheduled_at'))
        batch_op.drop_index(batch_op.f('ix_music_classes_instrument'))
        batch_op.drop_index(batch_op.f('ix_music_classes_instructor_id'))
    op.drop_table('music_classes')

    with op.batch_alter_table('instructors', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_instructors_name'))
    op.drop_table('instructors')
