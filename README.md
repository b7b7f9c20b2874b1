# odilia

Building blocks for a screen reader: the events and commands that pass
between its parts, an in-memory cache of the accessibility tree, the
settings it reads, and a keyboard binding engine that turns key presses
held under an activation key into screen-reader events.

The package has no runtime dependencies beyond the standard library.

## What is inside

- `odilia.modes`: `ScreenReaderMode`, the `Focus` and `Browse` modes.
- `odilia.roles`: `Role`, the accessible roles used for structural navigation.
- `odilia.events`: the events a user can trigger (`StopSpeech`, `Enable`,
  `Disable`, `ChangeMode`, `StructuralNavigation`, `Quit`), the `Feature`
  and `Direction` enums, `ScreenReaderEventType`, and the functions
  `event_type`, `to_json` and `from_json`.
- `odilia.command`: the commands handlers produce (`Speak`, `Focus`,
  `CaretPos`, `SetState`), `Priority`, `CommandType`, `command_type`, and
  `into_commands` / `try_into_commands`, which flatten a handler's result
  (a command, a `(Priority, str)` pair, a list of commands, or a tuple of
  these) into an iterator of commands.
- `odilia.primitive`: `AccessiblePrimitive`, the `(sender, id)` key that
  identifies an accessible object.
- `odilia.cache`: `Cache`, `CacheItem`, `RelationSet` (with `Linked` and
  `Unlinked` targets) and the abstract `CacheDriver` used to fetch items
  the cache does not hold yet.
- `odilia.settings`: `ApplicationConfig` with `SpeechSettings`,
  `LogSettings` and `InputSettings` sections, convertible with
  `to_dict` / `from_dict`; `default_log_path` gives the default log file
  under the XDG state directory.
- `odilia.types`: `ElementType`, `Granularity`, `IndexesSelection`,
  `GranularSelection`, `AriaLive` and `parse_aria_live`.
- `odilia.keys`: `Key`, `Button`, the raw input events (`KeyPress`,
  `KeyRelease`, `ButtonPress`, `ButtonRelease`, `MouseMove`, `Wheel`,
  wrapped in `InputEvent`), `key_value`, and `KeySet`, an ordered set of keys.
- `odilia.keyboard`: `ComboSet`, `ComboSets`, `State` and `callback`,
  the key-binding state machine, with `ComboError` and `SetError`.
- `odilia.server`: `get_file_paths` and `handle_events_to_socket`, which
  send events as JSON over the screen reader's Unix socket.
- `odilia.errors`: `OdiliaError` and the more specific errors below it,
  such as `CacheError`, `DuplicateItem`, `MoreData` and `NodeError`.

## Events as JSON

Events travel between processes as JSON:

```python
from odilia.events import ChangeMode, StopSpeech, from_json, to_json
from odilia.modes import ScreenReaderMode

print(to_json(StopSpeech()))                        # {"StopSpeech":null}
print(to_json(ChangeMode(ScreenReaderMode.Browse)))  # {"ChangeMode":"Browse"}
assert from_json(to_json(StopSpeech())) == StopSpeech()
```

## Key bindings

`ComboSets.default()` gives the stock bindings: F, G and B (focus mode,
stop speech, browse mode) and Shift+Q (quit) in every mode, and T, H, I
and K (with Shift for the backward direction) to move between tables,
headers, images and links in browse mode. Every binding is pressed while
Caps Lock, the activation key, is held.

`callback(event, state)` consumes one `InputEvent`: it returns `None` when
the event is swallowed and the event itself when it should pass through to
other applications. When a full binding has been pressed, the matching
event is put on `state.tx` (a `queue.Queue` by default), and a
`ChangeMode` binding also switches `state.mode`. Key releases for keys
pressed before activation are always passed through.

```python
from odilia.keyboard import ComboSets, State, callback
from odilia.keys import InputEvent, Key, KeyPress

state = State(combos=ComboSets.default())
callback(InputEvent(KeyPress(Key.CapsLock)), state)
callback(InputEvent(KeyPress(Key.KeyG)), state)
print(state.tx.get_nowait())  # StopSpeech()
```

Bindings are checked when they are added: two bindings may not share the
same keys or one be a prefix of the other within a mode, no binding may be
empty, and a mode-specific set may only be added once some earlier binding
can switch to that mode. Violations raise `ComboError` or `SetError`.

## The cache

`Cache` keeps accessible objects in a tree keyed by `AccessiblePrimitive`.
`add` stores a copy of an item and links it under its parent at its index;
it raises `DuplicateItem` if the key is already cached, and `MoreData`
listing the keys still needed when the parent, a related object or a left
sibling is missing. `get_or_create` fetches missing items through the
cache's driver until nothing more is needed. `node_id`, `children`,
`descendants` and `ancestors` walk the tree.

## What the package does not do

- It does not read keys from the system: feed `InputEvent` values to
  `callback` yourself.
- It does not talk to the accessibility bus: `CacheDriver` is an abstract
  class, and you supply the `lookup_external` that fetches items.
- It does not read configuration files: build `ApplicationConfig` directly
  or from a mapping with `ApplicationConfig.from_dict`.
- It installs no command-line program.

## Running the tests

Install the `test` extra, then run `pytest` from the project directory.