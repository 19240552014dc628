from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class Gender(str, enum.Enum):
    """Gender of a name listing, inferred from its table caption"""
    MALE = "male"
    FEMALE = "female"


class LoadStage(str, enum.Enum):
    """Progress of a single import run"""
    START = "start"
    SCHEMA_READY = "schema_ready"
    CLEARED = "cleared"
    INSERTING = "inserting"
    METADATA_WRITTEN = "metadata_written"
    REPORTING = "reporting"
    CLOSED = "closed"
    FAILED = "failed"
