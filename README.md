# mqttkit

Building blocks for MQTT v5 clients, written in plain Python with no
third-party dependencies.

## What is inside

- `mqttkit.logs`: the `Logger` interface (`println` and `printf`), a silent
  `NoopLogger`, and `CallbackLogger(sink, prefix="")`, which passes each
  line, with a timestamp and the prefix in front, to any callable. A `None`
  sink discards lines.
- `mqttkit.properties`: `UserProperty` and `UserProperties`, an ordered list
  of key/value pairs in which keys may repeat, with `add` (chainable), `get`
  (first value, or `""`) and `get_all`. `bool_to_byte` turns a flag into
  `1` or `0`.
- `mqttkit.publish`: `Publish`, `PublishProperties`, `PublishResponse` and
  `PublishResponseProperties`. `str(publish)` gives a readable summary of the
  topic, QoS, retain flag, set properties and payload.
- `mqttkit.messages`: `Connect`, `ConnectProperties`, `WillMessage`,
  `WillProperties`, `Disconnect`, `DisconnectProperties`, `Subscribe`,
  `SubscribeOptions`, `SubscribeProperties`, `Suback`, `SubackProperties`,
  `Unsubscribe`, `UnsubscribeProperties`, `Unsuback` and
  `UnsubackProperties`, all as dataclasses.
- `mqttkit.router`: `StandardRouter`, which hands incoming `Publish` messages
  to handlers by topic filter and keeps track of topic aliases the server
  announces. The functions `match`, `route_includes_topic`, `route_split` and
  `topic_split` are available on their own.
- `mqttkit.topicaliases`: `TopicAliasHandler`, which replaces the topic of
  outgoing publishes with alias numbers.
- `mqttkit.sendquota`: `SendQuota`, which limits how many QoS 1/2 publishes
  are in flight and serves waiters in first-in, first-out order.
- `mqttkit.memorystore` and `mqttkit.filestore`: session stores
  (`MemoryStore`, `FileStore`) that keep packets in memory or on disk and
  list them in the order they were put. `Storer` describes the interface they
  share.

## Installing

    pip install mqttkit

## Routing messages

    from mqttkit.publish import Publish
    from mqttkit.router import StandardRouter

    router = StandardRouter()
    router.register_handler("sensors/+/temperature", lambda p: print(p.topic))
    router.default_handler(lambda p: print("unrouted:", p.topic))

    router.route(Publish(topic="sensors/kitchen/temperature", payload=b"21.5"))

Filters support `+` (one level), `#` (all remaining levels) and shared
subscriptions of the form `$share/<group>/<filter>`. Every handler whose
filter matches is called; when none matches, the default handler is called.
Pass `None` to `default_handler` to remove it, or give a default to the
constructor: `StandardRouter(default=handler)`. `unregister_handler(topic)`
removes all handlers for a filter, and `set_debug_logger` takes any `Logger`.

## Topic aliases

    from mqttkit.publish import Publish
    from mqttkit.topicaliases import TopicAliasHandler

    aliases = TopicAliasHandler(10)
    publish = Publish(topic="sensors/kitchen/temperature")
    aliases.publish_hook(publish)
    # publish.topic is now "" and publish.properties.topic_alias is 1

A publish that already carries an alias reassigns that alias to its topic.
Otherwise a known alias is reused, or the first free one is taken; when none
is free the publish is left as it was.

## Limiting messages in flight

    from mqttkit.sendquota import SendQuota

    quota = SendQuota(20)
    quota.acquire(timeout=5.0)  # blocks while 20 slots are taken
    ...
    quota.release()

`acquire` takes a free slot at once, even if its `cancel` event is already
set. Otherwise it waits; it raises `TimeoutError` when `timeout` runs out and
`QuotaCancelledError` when the `cancel` event (a `threading.Event`) is set.
`retransmit` takes a slot without ever blocking, which may push the quota
below zero. A `release` that would raise the quota above its starting value
raises `UnexpectedReleaseError`. The `quota` and `waiting` properties show
the free slots and the number of blocked callers.

## Storing session state

    from mqttkit.memorystore import MemoryStore

    store = MemoryStore()
    store.put(1, 3, b"\x32\x00")
    print(store.list())  # [1]
    data = store.get(1).read()

`put` accepts bytes or any object with a `write_to(stream)` method. On a
`MemoryStore`, `get` and `delete` raise `NotInStoreError` for an unknown id,
and `quarantine` simply deletes the packet.

`FileStore(path, prefix, extension)` offers the same methods and keeps one
file per packet, named `<prefix><id><extension>`, in an existing directory;
it checks on creation that it can write, read and remove a file there.
Packets are written through a temporary file and renamed into place, and
`list` orders them by file modification time. `quarantine` renames a packet's
file with a `.CORRUPT` ending so it is no longer listed (deleting it if that
fails). Failures are raised as `FileStoreError`.

## What this package does not do

There is no network client here: nothing opens a connection to a broker,
encodes or decodes packets on the wire, sends pings or keeps session state
across reconnections. The message classes, router, alias handler, quota and
stores are parts to build such a client from.

## Running the tests

    pip install "mqttkit[test]"
    pytest