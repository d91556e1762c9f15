from .card_repository import CardRepositoryProtocol

__all__ = ["CardRepositoryProtocol"]
