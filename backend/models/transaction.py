"""
Transaction Model - Maps fixture fields to the transactions table

Fixture Field Mapping (product_transaction.json):
  Fixture Field     → DB Column        Notes
  ─────────────────────────────────────────────────────────────
  id                → source_id        Opaque, coerced to string, NOT unique
  title             → title
  description       → description
  price             → price            Required, non-negative
  category          → category         Low cardinality label
  image             → image            Optional URL
  sold / isSold     → is_sold          Cast to boolean at seed time
  dateOfSale        → date_of_sale     Parsed, stored as naive UTC
"""
from models.database import db
from datetime import datetime


class Transaction(db.Model):
    __tablename__ = 'transactions'

    # Surrogate key; the fixture id is not guaranteed unique
    pk = db.Column(db.Integer, primary_key=True)

    source_id = db.Column(db.String(64), index=True)
    title = db.Column(db.Text, nullable=False, default='')
    description = db.Column(db.Text, nullable=False, default='')
    price = db.Column(db.Float, nullable=False)
    date_of_sale = db.Column(db.DateTime, index=True, nullable=False)
    category = db.Column(db.String(100), index=True, nullable=False, default='')
    is_sold = db.Column(db.Boolean, index=True, nullable=False, default=False)
    image = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def from_record(cls, record):
        """Build a row from a normalized fixture record (camelCase keys)."""
        return cls(
            source_id=record['id'],
            title=record['title'],
            description=record['description'],
            price=record['price'],
            date_of_sale=record['dateOfSale'],
            category=record['category'],
            is_sold=record['isSold'],
            image=record.get('image'),
        )

    def to_dict(self):
        """Convert to dictionary for JSON serialization (camelCase keys for the frontend)."""
        return {
            'id': self.source_id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            # Stored as naive UTC
            'dateOfSale': self.date_of_sale.isoformat() + 'Z' if self.date_of_sale else None,
            'category': self.category,
            'isSold': bool(self.is_sold),
            'image': self.image,
        }

    def __repr__(self):
        return f"<Transaction {self.source_id} {self.title!r} {self.price}>"
