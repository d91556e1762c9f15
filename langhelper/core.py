from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncSession

from langhelper.application.learning.use_cases.card_inversion_use_case import (
    CardInversionUseCase,
)
from langhelper.application.learning.use_cases.learning_session_use_case import (
    LearningSessionUseCase,
)
from langhelper.application.learning.use_cases.streak_use_case import StreakUseCase
from langhelper.domain.learning.services.answer_matcher import AnswerMatcher
from langhelper.domain.learning.services.card_inverter import CardInverter
from langhelper.infrastructure.learning.repositories.card_repository import (
    SqlAlchemyCardRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=AsyncSession)

    # Repositories
    card_repository = providers.Factory(SqlAlchemyCardRepository, db=db)

    # Domain services (pure domain logic, no db)
    answer_matcher = providers.Singleton(AnswerMatcher)
    card_inverter = providers.Singleton(CardInverter)

    # Learning module, application use cases
    learning_session_use_case = providers.Factory(
        LearningSessionUseCase,
        card_repository=card_repository,
        answer_matcher=answer_matcher,
    )
    streak_use_case = providers.Factory(
        StreakUseCase,
        card_repository=card_repository,
    )
    card_inversion_use_case = providers.Factory(
        CardInversionUseCase,
        card_repository=card_repository,
        card_inverter=card_inverter,
    )


container = Container()
