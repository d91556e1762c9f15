"""
Learning bounded context - Application layer.

Use cases orchestrate the card store and the learning domain:
- LearningSessionUseCase: create sessions, check answers, close sets
- StreakUseCase: persist streak outcomes of tests and repeats
- CardInversionUseCase: derive and save inverse cards
"""
