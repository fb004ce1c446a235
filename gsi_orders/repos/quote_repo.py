# gsi_orders/repos/quote_repo.py
from sqlalchemy.orm import Session

from gsi_orders.data.models.quote import QuoteModel


class QuoteRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_quote(self, quote: QuoteModel) -> QuoteModel:
        self.db.add(quote)
        self.db.commit()
        self.db.refresh(quote)
        return quote

    def rollback(self):
        self.db.rollback()
