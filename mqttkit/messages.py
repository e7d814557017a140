"""Connect, Disconnect, Subscribe and Unsubscribe messages and their acknowledgements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from mqttkit.properties import UserProperties, UserProperty

_UserInput = Union[UserProperties, Iterable[Union[UserProperty, tuple[str, str]]]]


def _as_user_properties(value: _UserInput) -> UserProperties:
    if isinstance(value, UserProperties):
        return value
    return UserProperties(value)


@dataclass
class ConnectProperties:
    """Properties that may be set on a Connect."""

    auth_data: Optional[bytes] = None
    auth_method: str = ""
    session_expiry_interval: Optional[int] = None
    will_delay_interval: Optional[int] = None
    receive_maximum: Optional[int] = None
    topic_alias_maximum: Optional[int] = None
    maximum_qos: Optional[int] = None
    maximum_packet_size: Optional[int] = None
    user: UserProperties = field(default_factory=UserProperties)
    request_problem_info: bool = True
    request_response_info: bool = False

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class WillMessage:
    """The last-will message that may accompany a Connect."""

    retain: bool = False
    qos: int = 0
    topic: str = ""
    payload: bytes = b""


@dataclass
class WillProperties:
    """Properties that may be set on the will of a Connect."""

    will_delay_interval: Optional[int] = None
    payload_format: Optional[int] = None
    message_expiry: Optional[int] = None
    content_type: str = ""
    response_topic: str = ""
    correlation_data: Optional[bytes] = None
    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Connect:
    """An MQTT Connect message."""

    password: bytes = b""
    username: str = ""
    client_id: str = ""
    properties: Optional[ConnectProperties] = None
    will_message: Optional[WillMessage] = None
    will_properties: Optional[WillProperties] = None
    keep_alive: int = 0
    clean_start: bool = False
    username_flag: bool = False
    password_flag: bool = False


@dataclass
class DisconnectProperties:
    """Properties that may be set on a Disconnect."""

    server_reference: str = ""
    reason_string: str = ""
    session_expiry_interval: Optional[int] = None
    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Disconnect:
    """An MQTT Disconnect message."""

    properties: Optional[DisconnectProperties] = None
    reason_code: int = 0


@dataclass
class SubscribeOptions:
    """The options for a single subscription."""

    topic: str = ""
    qos: int = 0
    retain_handling: int = 0
    no_local: bool = False
    retain_as_published: bool = False


@dataclass
class SubscribeProperties:
    """Properties that may be set on a Subscribe."""

    subscription_identifier: Optional[int] = None
    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Subscribe:
    """An MQTT Subscribe message holding one or more subscriptions."""

    properties: Optional[SubscribeProperties] = None
    subscriptions: list[SubscribeOptions] = field(default_factory=list)


@dataclass
class SubackProperties:
    """Properties carried by a Suback."""

    reason_string: str = ""
    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Suback:
    """An MQTT Suback message; one reason code per requested subscription."""

    properties: Optional[SubackProperties] = None
    reasons: bytes = b""


@dataclass
class UnsubscribeProperties:
    """Properties that may be set on an Unsubscribe."""

    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Unsubscribe:
    """An MQTT Unsubscribe message."""

    topics: list[str] = field(default_factory=list)
    properties: Optional[UnsubscribeProperties] = None


@dataclass
class UnsubackProperties:
    """Properties carried by an Unsuback."""

    reason_string: str = ""
    user: UserProperties = field(default_factory=UserProperties)

    def __post_init__(self) -> None:
        self.user = _as_user_properties(self.user)


@dataclass
class Unsuback:
    """An MQTT Unsuback message; one reason code per topic."""

    reasons: bytes = b""
    properties: Optional[UnsubackProperties] = None