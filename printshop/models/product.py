"""Product model"""

from sqlalchemy import Column, String, Text, Numeric, Integer, CheckConstraint

from .base import BaseModel, IntegerIDModel, CreatedAtModel

class Product(BaseModel, IntegerIDModel, CreatedAtModel):
    """A printed item in the catalog"""

    __tablename__ = "products"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(500), nullable=False, default="")
    category = Column(String(100), nullable=False, default="", index=True)

    # Stock is informational only, orders never decrement it
    in_stock = Column(Integer, nullable=False, default=0)

    print_time = Column(String(50), nullable=False, default="")
    created_by = Column(String(100), nullable=False, default="")

    __table_args__ = (
        CheckConstraint("price >= 0", name="check_non_negative_price"),
        CheckConstraint("in_stock >= 0", name="check_non_negative_stock"),
    )

# Fields a caller may set on create/update; id and created_at are owned by the store
EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "image_url",
    "category",
    "in_stock",
    "print_time",
    "created_by",
)
