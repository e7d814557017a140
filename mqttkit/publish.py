"""Publish messages and the responses to QoS 1 and QoS 2 publishes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mqttkit.properties import UserProperties


@dataclass
class PublishProperties:
    """Properties that may be set on a Publish."""

    correlation_data: Optional[bytes] = None
    content_type: str = ""
    response_topic: str = ""
    payload_format: Optional[int] = None
    message_expiry: Optional[int] = None
    subscription_identifier: Optional[int] = None
    topic_alias: Optional[int] = None
    user: UserProperties = field(default_factory=UserProperties)


@dataclass
class Publish:
    """An MQTT Publish message."""

    packet_id: int = 0
    qos: int = 0
    retain: bool = False
    topic: str = ""
    properties: Optional[PublishProperties] = None
    payload: bytes = b""

    def __str__(self) -> str:
        lines = [
            f"topic: {self.topic}  qos: {self.qos}  "
            f"retain: {'true' if self.retain else 'false'}\n"
        ]
        props = self.properties
        if props is not None:
            if props.payload_format is not None:
                lines.append(f"PayloadFormat: {props.payload_format}\n")
            if props.message_expiry is not None:
                lines.append(f"MessageExpiry: {props.message_expiry}\n")
            if props.content_type:
                lines.append(f"ContentType: {props.content_type}\n")
            if props.response_topic:
                lines.append(f"ResponseTopic: {props.response_topic}\n")
            if props.correlation_data is not None:
                data = " ".join(str(b) for b in props.correlation_data)
                lines.append(f"CorrelationData: [{data}]\n")
            if props.topic_alias is not None:
                lines.append(f"TopicAlias: {props.topic_alias}\n")
            if props.subscription_identifier is not None:
                lines.append(
                    f"SubscriptionIdentifier: {props.subscription_identifier}\n"
                )
            lines.extend(f"User: {p.key} : {p.value}\n" for p in props.user)
        lines.append(self.payload.decode("utf-8", errors="replace"))
        return "".join(lines)


@dataclass
class PublishResponseProperties:
    """Properties carried by a response to a QoS 1 or QoS 2 Publish."""

    reason_string: str = ""
    user: UserProperties = field(default_factory=UserProperties)


@dataclass
class PublishResponse:
    """A response (PUBACK, PUBREC or PUBCOMP) to a QoS 1 or QoS 2 Publish."""

    reason_code: int = 0
    properties: Optional[PublishResponseProperties] = None