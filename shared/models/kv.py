from sqlalchemy import Column, String, BigInteger, JSON
from shared.models.base import Base, TimestampMixin


class KeyValueEntry(Base, TimestampMixin):
    __tablename__ = "token_alert_kv"

    key = Column(String(128), primary_key=True)
    json_value = Column(JSON)
    number_value = Column(BigInteger)
