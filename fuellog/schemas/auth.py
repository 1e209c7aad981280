"""
Schemas d'authentification / Authentication schemas.
Inscription, connexion, profil et preferences.
"""

from pydantic import Field

from fuellog.models.user import DistanceUnit, EconomyUnit, VolumeUnit
from fuellog.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Requete d'inscription / Registration request."""
    email: str = Field(min_length=3, max_length=150, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=8, max_length=200)


class LoginRequest(CamelModel):
    """Requete de connexion / Login request."""
    email: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=200)


class TokenResponse(CamelModel):
    """Reponse avec token / Token response."""
    access_token: str
    token_type: str = "bearer"


class UserMe(CamelModel):
    """Profil courant / Current profile."""
    id: int
    email: str
    default_distance_unit: DistanceUnit
    default_volume_unit: VolumeUnit
    default_economy_unit: EconomyUnit
    default_currency: str


class PreferencesUpdate(CamelModel):
    default_distance_unit: DistanceUnit | None = None
    default_volume_unit: VolumeUnit | None = None
    default_economy_unit: EconomyUnit | None = None
    default_currency: str | None = Field(None, min_length=3, max_length=3)
