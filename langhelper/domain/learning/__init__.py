"""
Learning bounded context - Domain layer.

This context handles vocabulary learning:
- Cards with words, meanings and streaks
- Study/test sessions over fixed-size sets of cards
- Typo-tolerant answer checking
- Inverse (reverse-direction) card generation

Aggregates:
- LearningSession: one study/test run over a snapshot of cards
- Card: a vocabulary card owned by the card store
"""
