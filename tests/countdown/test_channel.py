import asyncio
import unittest

from countdown import ChannelClosed, ChannelTimeout, Response, create_channel


class ChannelTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_the_initial_value(self) -> None:
        _, rx = create_channel(42)

        self.assertEqual(Response.of(42), await rx.recv())

    async def test_times_out_when_no_update_arrives(self) -> None:
        _, rx = create_channel(42, timeout_ms=20)
        self.assertEqual(Response.of(42), await rx.recv())

        with self.assertRaises(ChannelTimeout) as context:
            await rx.recv()

        self.assertEqual(20, context.exception.timeout_ms)
        self.assertIn("timed out after 20ms", str(context.exception))

    async def test_returns_updated_value(self) -> None:
        tx, rx = create_channel(100)
        self.assertEqual(Response.of(100), await rx.recv())

        tx.send(50)

        self.assertEqual(Response.of(50), await rx.recv())

    async def test_returns_latest_value_only(self) -> None:
        tx, rx = create_channel(100)
        self.assertEqual(Response.of(100), await rx.recv())

        tx.send(99)
        tx.send(50)
        self.assertEqual(Response.of(50), await rx.recv())

        tx.send(25)
        self.assertEqual(Response.of(25), await rx.recv())
        await tx.close()

        self.assertTrue((await rx.recv()).closed)

    async def test_close_waits_for_the_latest_value_to_be_acknowledged(self) -> None:
        tx, rx = create_channel(0)
        received: list[Response[int]] = []

        async def read_all() -> None:
            while True:
                response = await rx.recv()
                received.append(response)
                if response.closed:
                    return

        reader = asyncio.create_task(read_all())
        tx.send(1)
        await tx.close()
        await asyncio.wait_for(reader, timeout=1.0)

        self.assertEqual([Response.of(1), Response(closed=True)], received)

    async def test_close_times_out_without_a_reader(self) -> None:
        tx, _ = create_channel(0, timeout_ms=20)

        with self.assertRaises(ChannelTimeout):
            await tx.close()
        self.assertFalse(tx.closed)

    async def test_abort_closes_immediately(self) -> None:
        tx, rx = create_channel(0)
        tx.abort()

        self.assertTrue((await rx.recv()).closed)
        with self.assertRaises(ChannelClosed):
            tx.send(1)

    async def test_abort_wakes_a_waiting_reader(self) -> None:
        tx, rx = create_channel(0)
        await rx.recv()

        waiting = asyncio.create_task(rx.recv())
        await asyncio.sleep(0)
        tx.abort()

        self.assertTrue((await asyncio.wait_for(waiting, timeout=1.0)).closed)

    def test_rejects_non_positive_timeout(self) -> None:
        with self.assertRaises(ValueError):
            create_channel(0, timeout_ms=0)


if __name__ == "__main__":
    unittest.main()
