from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings

from tuyalink.domain.credentials import Credentials


class ClientSettings(BaseSettings):
    client_id: Optional[str] = Field(None, validation_alias="TUYA_CLIENT_ID")
    client_secret: Optional[str] = Field(None, validation_alias="TUYA_CLIENT_SECRET")
    region: str = Field("eu", validation_alias="TUYA_REGION")

    timeout: float = Field(10.0, validation_alias="TUYA_TIMEOUT")
    page_size: int = Field(20, validation_alias="TUYA_PAGE_SIZE")

    logger_name: str = Field("tuyalink", validation_alias="TUYA_LOGGER_NAME")
    log_ring_size: int = Field(200, validation_alias="TUYA_LOG_RING_SIZE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")

    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def credentials(self) -> Credentials:
        if not self.has_credentials():
            raise ValueError("TUYA_CLIENT_ID and TUYA_CLIENT_SECRET must be set.")
        return Credentials(client_id=self.client_id, client_secret=self.client_secret, region=self.region)


@lru_cache
def get_settings() -> ClientSettings:
    return ClientSettings()
