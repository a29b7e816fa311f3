# path: backend/app/db/types.py
# Purpose: Portable column types (JSONB on PostgreSQL, JSON elsewhere).
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONType = JSON().with_variant(JSONB(), "postgresql")
