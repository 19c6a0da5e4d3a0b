import threading

import pytest

from observable_default.runtime.observation import ObservationRegistrar, track


def test_mutation_notifies_after_body():
    registrar = ObservationRegistrar()
    subject = object()
    events = []
    registrar.observe(lambda s, name: events.append((s, name)))

    with registrar.with_mutation(subject, "age"):
        assert events == []
    assert events == [(subject, "age")]


def test_failed_mutation_does_not_notify():
    registrar = ObservationRegistrar()
    events = []
    registrar.observe(lambda s, name: events.append(name))

    with pytest.raises(RuntimeError):
        with registrar.with_mutation(None, "age"):
            raise RuntimeError("write failed")
    assert events == []


def test_observe_filters_by_name_and_disposes():
    registrar = ObservationRegistrar()
    events = []
    dispose = registrar.observe(lambda s, name: events.append(name), names=["age"])

    with registrar.with_mutation(None, "name"):
        pass
    with registrar.with_mutation(None, "age"):
        pass
    dispose()
    with registrar.with_mutation(None, "age"):
        pass
    assert events == ["age"]


def test_track_collects_reads():
    registrar = ObservationRegistrar()

    def read():
        registrar.access(None, "name")
        registrar.access(None, "age")
        return 7

    value, names = track(read)
    assert value == 7
    assert names == {"name", "age"}


def test_reads_outside_tracking_are_not_recorded():
    registrar = ObservationRegistrar()
    registrar.access(None, "name")
    _, names = track(lambda: None)
    assert names == set()


def test_track_on_change_fires_once():
    registrar = ObservationRegistrar()
    calls = []
    track(lambda: registrar.access(None, "name"), on_change=lambda: calls.append(1))

    with registrar.with_mutation(None, "age"):
        pass
    assert calls == []
    with registrar.with_mutation(None, "name"):
        pass
    with registrar.with_mutation(None, "name"):
        pass
    assert calls == [1]


def test_tracking_is_per_thread():
    registrar = ObservationRegistrar()

    def apply():
        worker = threading.Thread(target=lambda: registrar.access(None, "other"))
        worker.start()
        worker.join()
        registrar.access(None, "mine")

    _, names = track(apply)
    assert names == {"mine"}
