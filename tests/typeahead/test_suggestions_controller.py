import asyncio

import pytest

from reactive_typeahead.typeahead import SuggestionsController, SuggestionsPhase


def make_controller(callback, debounce=0.0, keep=True):
    snapshots = []
    controller = SuggestionsController(
        callback,
        debounce_duration=debounce,
        on_update=snapshots.append,
        keep_suggestions_on_loading=keep,
    )
    return controller, snapshots


@pytest.mark.asyncio
async def test_request_publishes_loading_then_loaded():
    controller, snapshots = make_controller(lambda pattern: [pattern.upper(), pattern * 2])

    controller.request("ab")
    await controller.wait()

    assert [snapshot.phase for snapshot in snapshots] == [SuggestionsPhase.LOADING, SuggestionsPhase.LOADED]
    assert controller.snapshot.items == ("AB", "abab")
    assert controller.snapshot.pattern == "ab"
    assert not controller.pending


@pytest.mark.asyncio
async def test_async_callback_is_awaited():
    async def search(pattern):
        await asyncio.sleep(0)
        return [f"{pattern}-1"]

    controller, _ = make_controller(search)

    controller.request("x")
    await controller.wait()

    assert controller.snapshot.items == ("x-1",)


@pytest.mark.asyncio
async def test_empty_result_publishes_empty():
    controller, _ = make_controller(lambda pattern: [])

    controller.request("zzz")
    await controller.wait()

    assert controller.snapshot.phase == SuggestionsPhase.EMPTY


@pytest.mark.asyncio
async def test_failing_callback_publishes_error():
    def search(pattern):
        raise LookupError("backend down")

    controller, _ = make_controller(search)

    controller.request("a")
    await controller.wait()

    assert controller.snapshot.phase == SuggestionsPhase.ERROR
    assert isinstance(controller.snapshot.error, LookupError)


@pytest.mark.asyncio
async def test_debounce_keeps_only_last_request():
    patterns = []

    def search(pattern):
        patterns.append(pattern)
        return [pattern]

    controller, _ = make_controller(search, debounce=0.05)

    controller.request("l")
    controller.request("li")
    controller.request("lis")
    await controller.wait()

    assert patterns == ["lis"]
    assert controller.snapshot.items == ("lis",)


@pytest.mark.asyncio
async def test_stale_results_are_dropped():
    release = asyncio.Event()

    async def search(pattern):
        if pattern == "slow":
            await release.wait()
        return [pattern]

    controller, snapshots = make_controller(search)

    controller.request("slow")
    await asyncio.sleep(0.01)
    controller.request("fast")
    await controller.wait()
    release.set()
    await asyncio.sleep(0.01)

    assert controller.snapshot.items == ("fast",)
    assert all(snapshot.items != ("slow",) for snapshot in snapshots)


@pytest.mark.asyncio
async def test_loading_keeps_previous_items():
    controller, snapshots = make_controller(lambda pattern: [pattern])

    controller.request("a")
    await controller.wait()
    controller.request("b")
    await controller.wait()

    loading = [snapshot for snapshot in snapshots if snapshot.phase == SuggestionsPhase.LOADING]
    assert loading[-1].items == ("a",)


@pytest.mark.asyncio
async def test_loading_without_keep_drops_items():
    controller, snapshots = make_controller(lambda pattern: [pattern], keep=False)

    controller.request("a")
    await controller.wait()
    controller.request("b")
    await controller.wait()

    loading = [snapshot for snapshot in snapshots if snapshot.phase == SuggestionsPhase.LOADING]
    assert loading[-1].items == ()


@pytest.mark.asyncio
async def test_clear_cancels_and_resets():
    calls = []
    controller, _ = make_controller(lambda pattern: calls.append(pattern) or [pattern], debounce=0.05)

    controller.request("a")
    controller.clear()
    await asyncio.sleep(0.1)

    assert calls == []
    assert controller.snapshot.phase == SuggestionsPhase.IDLE
    assert not controller.pending


@pytest.mark.asyncio
async def test_wait_without_request_returns():
    controller, snapshots = make_controller(lambda pattern: [])

    await controller.wait()

    assert snapshots == []


@pytest.mark.asyncio
async def test_failing_update_handler_does_not_escape_task():
    seen = []

    def on_update(snapshot):
        seen.append(snapshot.phase)
        if snapshot.phase == SuggestionsPhase.LOADED:
            raise ValueError("cannot render item")

    controller = SuggestionsController(lambda pattern: [pattern], debounce_duration=0, on_update=on_update)

    task = controller.request("a")
    await controller.wait()

    assert task.done() and task.exception() is None
    assert seen == [SuggestionsPhase.LOADING, SuggestionsPhase.LOADED]
    assert controller.snapshot.items == ("a",)

    controller.request("b")
    await controller.wait()

    assert controller.snapshot.items == ("b",)
