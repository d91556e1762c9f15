from .card_repository import SqlAlchemyCardRepository

__all__ = ["SqlAlchemyCardRepository"]
