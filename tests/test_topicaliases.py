import pytest

from mqttkit.publish import Publish, PublishProperties
from mqttkit.topicaliases import TopicAliasHandler


@pytest.mark.parametrize(
    "alias_max,aliases,publish,expected,expected_aliases",
    [
        (
            4,
            ["", "", "", "test", ""],
            Publish(topic="test"),
            Publish(properties=PublishProperties(topic_alias=3)),
            ["", "", "", "test", ""],
        ),
        (
            4,
            ["", "", "", "test", ""],
            Publish(topic="test2", properties=PublishProperties(topic_alias=3)),
            Publish(topic="test2", properties=PublishProperties(topic_alias=3)),
            ["", "", "", "test2", ""],
        ),
        (
            4,
            ["", "", "", "", ""],
            Publish(topic="test"),
            Publish(properties=PublishProperties(topic_alias=1)),
            ["", "test", "", "", ""],
        ),
        (
            4,
            ["", "", "", "", ""],
            Publish(topic="test", properties=PublishProperties()),
            Publish(properties=PublishProperties(topic_alias=1)),
            ["", "test", "", "", ""],
        ),
        (
            1,
            ["", "full"],
            Publish(topic="test"),
            Publish(topic="test"),
            ["", "full"],
        ),
    ],
    ids=["has alias", "reset alias", "no alias", "properties no alias", "no alias free"],
)
def test_publish_hook(alias_max, aliases, publish, expected, expected_aliases):
    handler = TopicAliasHandler(alias_max, aliases)
    handler.publish_hook(publish)
    assert publish == expected
    assert handler.aliases == expected_aliases


def test_new_handler_is_empty():
    handler = TopicAliasHandler(3)
    assert handler.aliases == ["", "", "", ""]


def test_set_get_and_reset():
    handler = TopicAliasHandler(2)
    assert handler.set_alias("a") == 1
    assert handler.set_alias("b") == 2
    assert handler.set_alias("c") == 0
    assert handler.get_alias("b") == 2
    assert handler.get_alias("missing") == 0
    assert handler.get_topic(1) == "a"
    assert handler.get_topic(50) == ""
    handler.reset_alias("z", 1)
    assert handler.get_topic(1) == "z"