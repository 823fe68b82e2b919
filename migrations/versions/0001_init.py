from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'customer',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.Text, nullable=True),
        sa.Column('last_name', sa.Text, nullable=True),
        sa.Column('phone_number', sa.Text, nullable=True),
        sa.Column('email', sa.Text, nullable=True),
    )
    op.create_table(
        'address',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('customer_id', sa.Integer, sa.ForeignKey('customer.id'), nullable=True),
        sa.Column('address', sa.Text, nullable=False),
        sa.Column('city', sa.Text, nullable=True),
        sa.Column('state', sa.Text, nullable=True),
    )
    op.create_index('ix_address_customer_id', 'address', ['customer_id'])

def downgrade():
    op.drop_index('ix_address_customer_id', table_name='address')
    op.drop_table('address')
    op.drop_table('customer')
