from __future__ import annotations

from dynaconf import Dynaconf, Validator  # type: ignore[reportMissingTypeStubs]

from autocomplete.typedefs import Settings

MIN_SECRET_LENGTH = 32
SETTINGS_FILES = ("settings.toml", ".secrets.toml")


def valid_secret(secret: str) -> bool:
    """Validate a token signing secret.

    HS256 wants a key at least as long as its 256 bit digest, so anything shorter than
    32 characters is refused.
    """
    return len(secret) >= MIN_SECRET_LENGTH


config = Dynaconf(
    envvar_prefix="AUTOCOMPLETE",
    settings_files=list(SETTINGS_FILES),
    validators=[
        Validator("secret_key", must_exist=True, is_type_of=str, condition=valid_secret),
        Validator("host", default="127.0.0.1", is_type_of=str),
        Validator("port", default=8080, is_type_of=int, gte=0, lte=65535),
        Validator("token_lifetime", default=86400, is_type_of=(int, float), gt=0),
        Validator("cache_ttl", default=300, is_type_of=(int, float), gt=0),
        Validator("cache_sweep_interval", default=600, is_type_of=(int, float), gte=0),
        Validator("cache_maxsize", default=4096, is_type_of=int, gt=0),
        Validator("cache_invalidation", default="flush", is_in=("flush", "precise")),
        Validator("rate_limit", default=1.0, is_type_of=(int, float), gt=0),
        Validator("rate_burst", default=3, is_type_of=int, gte=1),
        Validator("users", default={}, is_type_of=dict),
    ],
)


def load_settings() -> Settings:
    """Validate the configuration and return it as :class:`Settings`.

    Raises
    ------
    dynaconf.ValidationError
        If a value is missing or out of range.
    """
    config.validators.validate()  # type: ignore[reportUnknownMemberType]

    return Settings(
        secret_key=str(config.secret_key),  # type: ignore[reportUnknownMemberType]
        host=str(config.host),  # type: ignore[reportUnknownMemberType]
        port=int(config.port),  # type: ignore[reportUnknownMemberType]
        token_lifetime=float(config.token_lifetime),  # type: ignore[reportUnknownMemberType]
        cache_ttl=float(config.cache_ttl),  # type: ignore[reportUnknownMemberType]
        cache_sweep_interval=float(config.cache_sweep_interval),  # type: ignore[reportUnknownMemberType]
        cache_maxsize=int(config.cache_maxsize),  # type: ignore[reportUnknownMemberType]
        cache_invalidation=str(config.cache_invalidation),  # type: ignore[reportUnknownMemberType]
        rate_limit=float(config.rate_limit),  # type: ignore[reportUnknownMemberType]
        rate_burst=int(config.rate_burst),  # type: ignore[reportUnknownMemberType]
        users={str(k): str(v) for k, v in dict(config.users).items()},  # type: ignore[reportUnknownMemberType]
    )
