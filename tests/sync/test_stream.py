"""Tests for sync/base.py"""

import threading
import time

from kubedns_sync.config.model import Configuration
from kubedns_sync.sync.base import UpdateStream, load_configuration


class TestUpdateStream:
    """Tests for UpdateStream."""

    def test_without_producer_never_yields(self):
        stream = UpdateStream()
        assert stream.poll() is None
        assert stream.poll(timeout=0.01) is None

    def test_delivers_in_order(self):
        configs = [Configuration(upstream_nameservers=[f"10.0.0.{i}"]) for i in range(3)]

        def producer(emit):
            for config in configs:
                emit(config)

        stream = UpdateStream(producer)
        received = [stream.poll(timeout=1) for _ in configs]
        assert received == configs

    def test_iteration_blocks_for_next_item(self):
        def producer(emit):
            time.sleep(0.05)
            emit(Configuration(upstream_nameservers=["8.8.8.8"]))

        stream = UpdateStream(producer)
        config = next(iter(stream))
        assert config.upstream_nameservers == ["8.8.8.8"]

    def test_slow_consumer_blocks_producer(self):
        """The producer can run at most one item ahead of the consumer."""
        produced = []
        done = threading.Event()

        def producer(emit):
            for i in range(5):
                emit(Configuration(upstream_nameservers=[f"10.0.0.{i}"]))
                produced.append(i)
            done.set()

        stream = UpdateStream(producer)
        time.sleep(0.1)
        # One item sits in the queue, the producer is blocked on the second
        assert produced == [0]
        assert not done.is_set()

        for _ in range(5):
            assert stream.poll(timeout=1) is not None
        assert done.wait(timeout=1)

    def test_producer_runs_on_daemon_thread(self):
        thread_info = {}

        def producer(emit):
            thread_info["daemon"] = threading.current_thread().daemon
            thread_info["name"] = threading.current_thread().name

        UpdateStream(producer, name="test-stream")
        for _ in range(100):
            if thread_info:
                break
            time.sleep(0.01)
        assert thread_info == {"daemon": True, "name": "test-stream"}


class TestLoadConfiguration:
    """Tests for load_configuration()."""

    def test_parses_and_validates(self, valid_configmap_data, valid_config):
        assert load_configuration(valid_configmap_data) == valid_config
