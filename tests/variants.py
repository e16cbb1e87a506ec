"""Three schema versions of a small greeting config, shared by the tests."""

from typing import List

from pydantic import Field

from codec_config import ConfigType, ModelCodec, VersionedConfig, build_codec


class GreetingV1(VersionedConfig):
    message: str = "hello"
    loud: bool = False

    def config_type(self) -> ConfigType:
        return GREETING_V1

    def upgrade_to_latest(self) -> "GreetingV3":
        return GreetingV3(greeting=self.message.upper() if self.loud else self.message)

    def auto_update_allowed(self) -> bool:
        return True


class GreetingV2(VersionedConfig):
    greeting: str = "hello"
    times: int = 1
    auto_update: bool = True

    def config_type(self) -> ConfigType:
        return GREETING_V2

    def upgrade_to_latest(self) -> "GreetingV3":
        return GreetingV3(greeting=self.greeting, times=self.times)

    def auto_update_allowed(self) -> bool:
        return self.auto_update


class GreetingV3(VersionedConfig):
    greeting: str = "hello"
    times: int = Field(1, ge=1)
    targets: List[str] = Field(default_factory=lambda: ["world"])

    def config_type(self) -> ConfigType:
        return GREETING_V3

    def upgrade_to_latest(self) -> "GreetingV3":
        return self

    def auto_update_allowed(self) -> bool:
        return True


class RogueConfig(VersionedConfig):
    """Claims a version the codec does not know about."""

    def config_type(self) -> ConfigType:
        return ConfigType(4, ModelCodec(RogueConfig))

    def upgrade_to_latest(self) -> "RogueConfig":
        return self

    def auto_update_allowed(self) -> bool:
        return True


GREETING_V1 = ConfigType.of_model(1, GreetingV1)
GREETING_V2 = ConfigType.of_model(2, GreetingV2)
GREETING_V3 = ConfigType.of_model(3, GreetingV3)

LATEST_VERSION = 3
TYPES = {1: GREETING_V1, 2: GREETING_V2, 3: GREETING_V3}
CODEC = build_codec(LATEST_VERSION, TYPES)
DEFAULT = GreetingV3()
