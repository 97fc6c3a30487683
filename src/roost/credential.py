"""Credential model shared by the vault, resolver, and delivery channel."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Credential(BaseModel):
    """One saved account: a name/username/secret triple.

    The secret is held as ``SecretStr`` so it is masked in ``str``/``repr`` and in
    log records. Call ``secret.get_secret_value()`` only where the value is released.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Service or application identifier, the primary matching key")
    username: str = Field(default="", description="Account username")
    secret: SecretStr = Field(description="Password or token")
