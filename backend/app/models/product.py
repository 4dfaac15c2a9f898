from sqlalchemy import Column, Integer, String, Numeric
from app.db.database import Base


class Product(Base):
    __tablename__ = "products"

    # Storage identity, never exposed over HTTP
    pk = Column(Integer, primary_key=True, autoincrement=True)
    # Catalog key assigned by whoever loads the catalog
    id = Column(Integer, unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)


# Range of the INTEGER id column; anything outside can never match a row
ID_MIN = -2**31
ID_MAX = 2**31 - 1
