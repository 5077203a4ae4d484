"""Create sds_documents table.

Revision ID: 5a1f2c3d4e6b
Revises:
Create Date: 2026-10-18

This migration adds the sds_documents table holding each Safety Data
Sheet's source location together with the hazard record extracted from it.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '5a1f2c3d4e6b'
down_revision = None
branch_labels = None
depends_on = None

JSON_LIST_COLUMNS = (
    'h_codes',
    'pictograms',
    'hazard_statements',
    'precautionary_statements',
    'physical_hazards',
    'health_hazards',
    'environmental_hazards',
    'regulatory_notes',
)

JSON_OBJECT_COLUMNS = (
    'first_aid',
    'ppe_requirements',
    'hmis_codes',
    'nfpa_codes',
    'ghs_section2_data',
    'handling_storage',
)


def upgrade() -> None:
    """Create sds_documents table."""
    op.create_table(
        'sds_documents',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('facility_id', postgresql.UUID(as_uuid=True), nullable=True,
                  comment='Owning facility, used to scope batch runs'),

        # Descriptive
        sa.Column('product_name', sa.String(), nullable=True),
        sa.Column('manufacturer', sa.String(), nullable=True),
        sa.Column('cas_number', sa.String(), nullable=True),
        sa.Column('file_name', sa.String(), nullable=True),
        sa.Column('document_type', sa.String(), nullable=True,
                  comment='safety_data_sheet, regulatory_sheet, regulatory_sheet_article, unknown_document'),

        # Source location
        sa.Column('source_url', sa.Text(), nullable=True),
        sa.Column('bucket_url', sa.Text(), nullable=True),
        sa.Column('full_text', sa.Text(), nullable=True),

        # Extracted hazard fields
        sa.Column('signal_word', sa.String(), nullable=True, comment='DANGER or WARNING'),
        *[
            sa.Column(name, postgresql.JSONB(), nullable=False, server_default='[]')
            for name in JSON_LIST_COLUMNS
        ],
        *[
            sa.Column(name, postgresql.JSONB(), nullable=False, server_default='{}')
            for name in JSON_OBJECT_COLUMNS
        ],

        # Quality metadata
        sa.Column('extraction_quality_score', sa.Integer(), nullable=True, comment='0-100'),
        sa.Column('ai_extraction_confidence', sa.Integer(), nullable=True, comment='0-100'),
        sa.Column('extraction_status', sa.String(), nullable=False, server_default='pending',
                  comment='pending, completed, osha_compliant, manual_review_required, ai_enhanced'),
        sa.Column('is_readable', sa.Boolean(), nullable=True),
        sa.Column('last_extracted_at', sa.TIMESTAMP(timezone=True), nullable=True),

        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
    )

    op.create_index('idx_sds_documents_facility_id', 'sds_documents', ['facility_id'])
    op.create_index('idx_sds_documents_quality_score', 'sds_documents', ['extraction_quality_score'])


def downgrade() -> None:
    """Drop sds_documents table."""
    op.drop_index('idx_sds_documents_quality_score', table_name='sds_documents')
    op.drop_index('idx_sds_documents_facility_id', table_name='sds_documents')
    op.drop_table('sds_documents')
