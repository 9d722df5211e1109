import random

from selami.effects.celebration import CENTER_PARTICLES, CelebrationSequence

def _sequence(scheduler, emitted):
    return CelebrationSequence(
        emit=emitted.append, scheduler=scheduler, duration_ms=5000, interval_ms=250, rng=random.Random(7)
    )

def test_bursts_every_tick_for_the_window(scheduler):
    emitted = []
    seq = _sequence(scheduler, emitted)
    seq.celebrate()
    assert seq.running

    scheduler.advance(250)
    assert len(emitted) == 3
    left, right, center = emitted
    assert left["particleCount"] == 150 * (4750 / 5000)
    assert 0.1 <= left["origin"]["x"] <= 0.3
    assert 0.7 <= right["origin"]["x"] <= 0.9
    assert center["particleCount"] == CENTER_PARTICLES
    assert center["origin"] == {"x": 0.5, "y": 0.5}
    assert left["spread"] == 360

    scheduler.advance(5000)
    # ticks at 250..4750 emit, the tick at 5000 ends the window
    assert len(emitted) == 19 * 3
    assert not seq.running

def test_burst_size_decays(scheduler):
    emitted = []
    seq = _sequence(scheduler, emitted)
    seq.celebrate()
    scheduler.advance(5000)
    side_counts = [b["particleCount"] for b in emitted[0::3]]
    assert side_counts == sorted(side_counts, reverse=True)
    assert side_counts[-1] == 150 * (250 / 5000)

def test_celebrate_again_restarts_window(scheduler):
    emitted = []
    seq = _sequence(scheduler, emitted)
    seq.celebrate()
    scheduler.advance(1000)
    seq.celebrate()
    scheduler.advance(6000)
    assert len(emitted) == (4 + 19) * 3

def test_stop(scheduler):
    emitted = []
    seq = _sequence(scheduler, emitted)
    seq.celebrate()
    seq.stop()
    scheduler.advance(5000)
    assert emitted == []
