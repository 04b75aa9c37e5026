"""Tests for the pump, the simulated sensor and the end-to-end demo."""

import pytest

from conftest import open_grid
from main import SimulatedTiltSensor, TickPump, run_labyrinth_simulation
from physics import BallController, TiltReadError


class TestSimulatedTiltSensor:
    def test_drops_every_nth_read(self):
        sensor = SimulatedTiltSensor(drop_every=3)
        sensor.read()
        sensor.read()
        with pytest.raises(TiltReadError):
            sensor.read()

    def test_amplitude_bound(self):
        sensor = SimulatedTiltSensor(amplitude=1000)
        for _ in range(50):
            x, y = sensor.read()
            assert abs(x) <= 1000 and abs(y) <= 1000


class TestTickPump:
    def test_collects_one_center_per_tick(self):
        controller = BallController(open_grid(4, 4), start=(32, 32))
        pump = TickPump(controller, lambda: (-400, 0), period_ms=0)
        trace = pump.run(5)
        assert len(trace) == 6
        assert trace[0] == (32, 32)
        assert trace[-1] == (42, 32)
        assert not pump.running

    def test_stop_ends_run(self):
        controller = BallController(open_grid(4, 4), start=(32, 32))
        reads = []

        def read():
            reads.append(1)
            if len(reads) == 3:
                pump.stop()
            return (0, 0)

        pump = TickPump(controller, read, period_ms=0)
        trace = pump.run(10)
        assert len(reads) == 3
        assert len(trace) == 4

    def test_survives_dropped_samples(self):
        controller = BallController(open_grid(4, 4), start=(32, 32))
        pump = TickPump(controller, SimulatedTiltSensor(drop_every=2).read, period_ms=0)
        assert len(pump.run(6)) == 7


class TestSimulation:
    def test_writes_outputs(self, tmp_path):
        run_labyrinth_simulation(ticks=20, seed=5, period_ms=0, output_dir=str(tmp_path))
        for name in ["maze_walls.png", "maze_solution.png", "maze_connectivity.png", "maze_2d_flat.stl"]:
            assert (tmp_path / name).exists()
