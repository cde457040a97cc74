# textshare/models/local_storage_table.py
# Key/value table emulating browser local storage

from sqlalchemy import Table, Column, Text, TIMESTAMP

from textshare.db.base import metadata


local_storage = Table(
    'local_storage',
    metadata,
    Column('key', Text, primary_key=True),  # named key, e.g. textshare_history
    Column('value', Text, nullable=False),  # serialized payload
    Column('updated_at', TIMESTAMP(timezone=True), nullable=False),
)
