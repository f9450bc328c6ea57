from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    String,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class Driver(Base):
    __tablename__ = "drivers"
    # PESEL number, supplied by the client
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    name = Column(String(100))
    surname = Column(String(100))
    birth_date = Column(Date)
    phone_number = Column(String(20))
    email = Column(String(100))
    address = Column(String(255))
    license_number = Column(String(50))
    license_expiry = Column(Date)
