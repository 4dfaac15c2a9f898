from sqlalchemy import Column, Integer, Numeric, DateTime
from app.db.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # References products.id by value only, no foreign key
    product_id = Column("productId", Integer, nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)
