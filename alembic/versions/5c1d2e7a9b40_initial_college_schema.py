"""initial college schema

Revision ID: 5c1d2e7a9b40
Revises:
Create Date: 2026-10-12 10:14:02.118403

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1d2e7a9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('role', sa.Enum('admin', 'faculty', 'student', name='user_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_profiles_id', 'profiles', ['id'])
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    op.create_table(
        'batches',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
    )
    op.create_index('ix_batches_id', 'batches', ['id'])

    op.create_table(
        'classes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('section', sa.String(), nullable=True),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batches.id', ondelete='SET NULL'), nullable=True),
        sa.CheckConstraint('semester BETWEEN 1 AND 8', name='ck_classes_semester'),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.String(), nullable=False),
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('batch_id', sa.Integer(), sa.ForeignKey('batches.id', ondelete='SET NULL'), nullable=True),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.Enum('active', 'inactive', 'graduated', name='student_status'), nullable=False),
        sa.Column('enrollment_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_student_id', 'students', ['student_id'], unique=True)

    op.create_table(
        'faculty',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('faculty_id', sa.String(), nullable=False),
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('department', sa.String(), nullable=False),
        sa.Column('designation', sa.String(), nullable=True),
        sa.Column('status', sa.Enum('active', 'inactive', 'on_leave', name='faculty_status'), nullable=False),
        sa.Column('joining_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_faculty_id', 'faculty', ['id'])
    op.create_index('ix_faculty_faculty_id', 'faculty', ['faculty_id'], unique=True)

    op.create_table(
        'faculty_classes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('faculty_id', sa.Integer(), sa.ForeignKey('faculty.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
    )
    op.create_index('ix_faculty_classes_id', 'faculty_classes', ['id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('ix_subjects_id', 'subjects', ['id'])

    op.create_table(
        'courses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('course_code', sa.String(), nullable=False),
        sa.Column('course_name', sa.String(), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('program', sa.String(), nullable=True),
        sa.Column('assigned_faculty_id', sa.Integer(), sa.ForeignKey('faculty.id', ondelete='SET NULL'), nullable=True),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('ix_courses_id', 'courses', ['id'])
    op.create_index('ix_courses_course_code', 'courses', ['course_code'], unique=True)

    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('faculty_id', sa.Integer(), sa.ForeignKey('faculty.id', ondelete='SET NULL'), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.Enum('present', 'absent', name='attendance_status'), nullable=False),
        sa.Column('remarks', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_attendance_id', 'attendance', ['id'])
    op.create_index('ix_attendance_date', 'attendance', ['date'])

    op.create_table(
        'results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('subject_id', sa.Integer(), sa.ForeignKey('subjects.id', ondelete='SET NULL'), nullable=True),
        sa.Column('exam_type', sa.String(), nullable=False),
        sa.Column('academic_year', sa.String(), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('marks_obtained', sa.Numeric(6, 2), nullable=False),
        sa.Column('max_marks', sa.Numeric(6, 2), nullable=False),
        sa.Column('grade', sa.String(), nullable=True),
        sa.Column('uploaded_by', sa.Integer(), sa.ForeignKey('faculty.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_results_id', 'results', ['id'])

    op.create_table(
        'fee_invoices',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('semester', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_status', sa.Enum('pending', 'paid', 'overdue', name='payment_status'), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_fee_invoices_id', 'fee_invoices', ['id'])

    op.create_table(
        'circulars',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('priority', sa.Enum('normal', 'high', 'urgent', name='circular_priority'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('target_audience', sa.JSON(), nullable=False),
        sa.Column('attachment_url', sa.String(), nullable=True),
        sa.Column('published_by', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('ix_circulars_id', 'circulars', ['id'])


def downgrade() -> None:
    # Обратный порядок из-за внешних ключей
    for table in (
        'circulars',
        'fee_invoices',
        'results',
        'attendance',
        'courses',
        'subjects',
        'faculty_classes',
        'faculty',
        'students',
        'classes',
        'batches',
        'profiles',
    ):
        op.drop_table(table)
