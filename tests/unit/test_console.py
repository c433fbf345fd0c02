from patchbridge.orchestration.console import ConsoleBuffer, detect_level


def test_detect_level():
    assert detect_level("line 3: ERROR something") == "error"
    assert detect_level("Warning: deprecated") == "warning"
    assert detect_level("loaded") == "info"


def test_read_filters_by_level():
    buffer = ConsoleBuffer()
    buffer.push("hello")
    buffer.push("warning: careful")
    buffer.push("error: broken")

    messages, overflow = buffer.read("warning")
    assert [m.message for m in messages] == ["warning: careful", "error: broken"]
    assert overflow is False

    messages, _ = buffer.read("error")
    assert [m.level for m in messages] == ["error"]


def test_unknown_level_is_treated_as_info():
    buffer = ConsoleBuffer()
    buffer.push("hello")
    messages, _ = buffer.read("verbose")
    assert len(messages) == 1


def test_since_last_call_only_returns_new_messages():
    buffer = ConsoleBuffer()
    buffer.push("one")
    buffer.push("two")

    first, _ = buffer.read(since_last_call=True)
    assert [m.message for m in first] == ["one", "two"]

    buffer.push("three")
    second, _ = buffer.read(since_last_call=True)
    assert [m.message for m in second] == ["three"]

    third, _ = buffer.read(since_last_call=True)
    assert third == []

    everything, _ = buffer.read()
    assert len(everything) == 3


def test_ring_buffer_evicts_oldest_and_reports_overflow():
    buffer = ConsoleBuffer(max_size=3)
    for index in range(5):
        buffer.push(f"msg {index}")

    messages, overflow = buffer.read(since_last_call=True)
    assert [m.message for m in messages] == ["msg 2", "msg 3", "msg 4"]
    assert overflow is True

    buffer.push("msg 5")
    messages, overflow = buffer.read(since_last_call=True)
    assert [m.message for m in messages] == ["msg 5"]
    assert overflow is False


def test_ids_are_monotonic():
    buffer = ConsoleBuffer()
    ids = [buffer.push(f"m{index}").id for index in range(3)]
    assert ids == [0, 1, 2]
