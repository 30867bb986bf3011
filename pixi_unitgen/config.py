"""Names and locations shared by the generator."""

from enum import Enum

SYSTEM_EXEC_NAME = "systemd-pixi-system-generator"
USER_EXEC_NAME = "systemd-pixi-user-generator"
SYSTEM_UNIT_FILE_TEMPLATE = "src/resources/system.unit.service.tera"
USER_UNIT_FILE_TEMPLATE = "src/resources/user.unit.service.tera"


class Privilege(Enum):
    """The systemd manager scope the generator runs under."""

    SYSTEM = "system"
    USER = "user"
    UNSPEC = "unspec"

    @property
    def unit_template(self) -> str:
        """Relative path of the default unit-file template for this scope."""
        if self is Privilege.SYSTEM:
            return SYSTEM_UNIT_FILE_TEMPLATE
        return USER_UNIT_FILE_TEMPLATE