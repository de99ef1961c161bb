"""
Acoustic setup: one named configuration of an enclosure, the drivers filling
its roles and the responses computed for it.

Drivers are loaded through the environment's resolver and validated against
the role they are assigned to. Responses are created per type and bound to
the driver of one role plus the setup's enclosure and environment.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

from boxsim.constants import DriverRole, EnclosureType, ResponseType, role_to_string, type_to_string
from boxsim.driver import create_driver
from boxsim.enclosure import Enclosure, create_enclosure, enclosure_from_record
from boxsim.exceptions import EnclosureCreationError, OutOfRange, SetupCreationError
from boxsim.response import Response, create_response
from boxsim.role_config import RoleConfig

logger = logging.getLogger(__name__)


def _section(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    entries = data.get(key) or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise SetupCreationError(f"'{key}' must be a list of objects", path=key)
    return entries


def _field(entry: Dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise SetupCreationError(f"Missing or non-string '{key}'", path=f"{where}.{key}")
    return value


def _enum(enum_cls, value: str, path: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise OutOfRange(f"There is no {enum_cls.__name__} '{value}' (at {path})") from None


class AcousticSetup:
    """Binds driver roles and a single enclosure into one configuration."""

    def __init__(
        self,
        environment,
        enclosure_type: Union[EnclosureType, str] = EnclosureType.SEALED,
        name: str = "",
        enclosure: Optional[Enclosure] = None,
    ):
        self.name = name
        self._environment = environment
        self._enclosure = enclosure if enclosure is not None else create_enclosure(enclosure_type)
        self._drivers: Dict[DriverRole, RoleConfig] = {}
        self._identifiers: Dict[DriverRole, str] = {}
        self._responses: Dict[ResponseType, Response] = {}
        self._response_roles: Dict[ResponseType, DriverRole] = {}

    @classmethod
    def from_record(cls, environment, data: Union[Dict[str, Any], str]) -> 'AcousticSetup':
        """
        Rebuild a setup from the record produced by `to_dict`:

            {"name": ..., "enclosure": {...},
             "drivers": [{"role": "woofer", "identifier": ..., "count": 1}],
             "responses": [{"type": "Impedance", "role": "woofer"}]}
        """
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                raise SetupCreationError(f"Setup record is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise SetupCreationError("Setup record must be a JSON object")

        if data.get('enclosure') is None:
            raise EnclosureCreationError("Setup record has no enclosure", path='enclosure')
        try:
            enclosure = enclosure_from_record(data['enclosure'])
        except EnclosureCreationError as exc:
            path = f"enclosure.{exc.path}" if exc.path else 'enclosure'
            raise EnclosureCreationError(exc.message, path=path) from exc

        setup = cls(environment, name=str(data.get('name') or ''), enclosure=enclosure)
        for i, entry in enumerate(_section(data, 'drivers')):
            where = f"drivers.{i}"
            role = _enum(DriverRole, _field(entry, 'role', where), f"{where}.role")
            count = entry.get('count', 1)
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise SetupCreationError(f"Driver count must be a positive integer, got {count!r}",
                                         path=f"{where}.count")
            setup.set_driver(role, _field(entry, 'identifier', where), count)
        for i, entry in enumerate(_section(data, 'responses')):
            where = f"responses.{i}"
            kind = _enum(ResponseType, _field(entry, 'type', where), f"{where}.type")
            setup.set_response(kind, _enum(DriverRole, _field(entry, 'role', where), f"{where}.role"))
        return setup

    @property
    def environment(self):
        return self._environment

    @property
    def enclosure(self) -> Enclosure:
        return self._enclosure

    @property
    def roles(self) -> List[DriverRole]:
        return list(self._drivers)

    def add_driver(self, role: DriverRole, identifier: str, count: int = 1) -> bool:
        """Load and add a driver for `role`; returns False if the role is already taken."""
        if role in self._drivers:
            return False
        self.set_driver(role, identifier, count)
        return True

    def set_driver(self, role: DriverRole, identifier: str, count: int = 1):
        """Load a driver for `role`, replacing any existing one."""
        config = RoleConfig(create_driver(role, identifier, self._environment), count)
        self._drivers[role] = config
        self._identifiers[role] = identifier
        for kind, response_role in self._response_roles.items():
            if response_role == role:
                self._responses[kind].set_driver(config)
        logger.info("Set %s x%d for role %s", config.driver.model, count, role_to_string(role))

    def driver_by_role(self, role: DriverRole) -> RoleConfig:
        try:
            return self._drivers[role]
        except KeyError:
            raise OutOfRange(f"There is no driver with the role: {role_to_string(role)}") from None

    def remove_driver(self, role: DriverRole):
        if role not in self._drivers:
            raise OutOfRange(f"There is no driver with the role: {role_to_string(role)}")
        del self._drivers[role]
        del self._identifiers[role]
        for kind in [k for k, r in self._response_roles.items() if r == role]:
            self.remove_response(kind)
        logger.info("Removed driver for role %s", role_to_string(role))

    def add_response(self, kind: ResponseType, role: DriverRole = DriverRole.WOOFER) -> bool:
        """Create a response bound to the driver of `role`; False if `kind` already exists."""
        if kind in self._responses:
            return False
        self.set_response(kind, role)
        return True

    def set_response(self, kind: ResponseType, role: DriverRole = DriverRole.WOOFER) -> Response:
        config = self.driver_by_role(role)
        response = create_response(kind, self._enclosure, config.driver, config.count, self._environment)
        self._responses[kind] = response
        self._response_roles[kind] = role
        return response

    def response_by_type(self, kind: ResponseType) -> Response:
        try:
            return self._responses[kind]
        except KeyError:
            raise OutOfRange(f"There is no response of type: {type_to_string(kind)}") from None

    def remove_response(self, kind: ResponseType):
        if kind not in self._responses:
            raise OutOfRange(f"There is no response of type: {type_to_string(kind)}")
        del self._responses[kind]
        del self._response_roles[kind]

    def evaluate(self, kind: ResponseType, frequency: float) -> float:
        return self.response_by_type(kind).evaluate(frequency)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'enclosure': self._enclosure.to_dict(),
            'drivers': [
                {'role': role.value, 'identifier': self._identifiers[role], 'count': config.count}
                for role, config in self._drivers.items()
            ],
            'responses': [
                {'type': kind.value, 'role': role.value}
                for kind, role in self._response_roles.items()
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
