"""
PitchScore – SQLAlchemy ORM models package.

Imports all model classes so the app can discover them
through a single ``import pitchscore.models``.
"""

from pitchscore.models.user import User   # noqa: F401
from pitchscore.models.idea import Idea   # noqa: F401
