from __future__ import annotations

import asyncio

import pytest

from condenser.domain.errors import ChannelClosedError
from condenser.domain.processing import Channel, ChannelDrained


async def _drain(channel: Channel[int]) -> list[int]:
    items: list[int] = []
    while True:
        try:
            items.append(await channel.receive())
        except ChannelDrained:
            return items


def test_receivers_drain_remaining_items_after_close() -> None:
    async def scenario() -> list[int]:
        channel: Channel[int] = Channel(4)
        for value in (1, 2, 3):
            await channel.send(value)
        channel.close()
        return await _drain(channel)

    assert asyncio.run(scenario()) == [1, 2, 3]


def test_send_on_closed_channel_raises() -> None:
    async def scenario() -> None:
        channel: Channel[int] = Channel(1)
        channel.close()
        await channel.send(1)

    with pytest.raises(ChannelClosedError):
        asyncio.run(scenario())


def test_close_wakes_every_waiting_receiver() -> None:
    async def scenario() -> list[list[int]]:
        channel: Channel[int] = Channel(2)
        receivers = [asyncio.create_task(_drain(channel)) for _ in range(3)]
        await asyncio.sleep(0)
        channel.close()
        return await asyncio.gather(*receivers)

    assert asyncio.run(scenario()) == [[], [], []]


def test_close_on_full_channel_still_terminates_all_receivers() -> None:
    async def scenario() -> list[int]:
        channel: Channel[int] = Channel(1)
        receivers = [asyncio.create_task(_drain(channel)) for _ in range(3)]
        await asyncio.sleep(0)
        await channel.send(7)
        channel.close()
        results = await asyncio.wait_for(asyncio.gather(*receivers), timeout=5)
        return sorted(item for items in results for item in items)

    assert asyncio.run(scenario()) == [7]


def test_send_suspends_while_channel_is_full() -> None:
    async def scenario() -> tuple[bool, bool]:
        channel: Channel[int] = Channel(1)
        await channel.send(1)
        pending = asyncio.create_task(channel.send(2))
        await asyncio.sleep(0)
        blocked = not pending.done()
        assert await channel.receive() == 1
        await asyncio.wait_for(pending, timeout=5)
        return blocked, pending.done()

    assert asyncio.run(scenario()) == (True, True)


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        Channel(0)
