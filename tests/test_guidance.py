"""Tests for the gravity-turn pitch program and max-Q throttle protection."""
import unittest

from launch_sim import guidance
from launch_sim.config import create_test_config
from launch_sim.state import FlightState, Telemetry


class TestPitchProgram(unittest.TestCase):

    def test_vertical_below_turn_start(self):
        self.assertEqual(guidance.compute_target_pitch(0.0), 90.0)
        self.assertEqual(guidance.compute_target_pitch(150.0), 90.0)

    def test_linear_decrease(self):
        self.assertAlmostEqual(guidance.compute_target_pitch(50000.0), 67.5)
        self.assertAlmostEqual(guidance.compute_target_pitch(100000.0), 45.0)

    def test_clamped_at_zero(self):
        self.assertEqual(guidance.compute_target_pitch(500000.0), 0.0)

    def test_flight_path_tracks_pitch(self):
        cfg = create_test_config()
        state = FlightState()
        telemetry = Telemetry(altitude=20000.0)
        guidance.update_guidance(state, telemetry, cfg)
        self.assertAlmostEqual(telemetry.pitch, 81.0)
        self.assertEqual(telemetry.flight_path_angle, telemetry.pitch)


class TestThrottleProtection(unittest.TestCase):

    def setUp(self):
        self.cfg = create_test_config()

    def test_throttle_down_above_35kpa_on_stage1(self):
        self.assertEqual(guidance.compute_throttle_command(36000.0, 1, 100.0, self.cfg), 70.0)

    def test_no_throttle_down_on_stage2(self):
        self.assertEqual(guidance.compute_throttle_command(36000.0, 2, 100.0, self.cfg), 100.0)

    def test_hysteresis_band_holds(self):
        # Between 25 and 35 kPa the current level is kept
        self.assertEqual(guidance.compute_throttle_command(30000.0, 1, 70.0, self.cfg), 70.0)
        self.assertEqual(guidance.compute_throttle_command(30000.0, 1, 100.0, self.cfg), 100.0)

    def test_restore_below_25kpa(self):
        self.assertEqual(guidance.compute_throttle_command(24000.0, 1, 70.0, self.cfg), 100.0)

    def test_update_guidance_changes_state(self):
        state = FlightState()
        telemetry = Telemetry(altitude=12000.0, dynamic_pressure=40000.0)
        guidance.update_guidance(state, telemetry, self.cfg)
        self.assertEqual(state.throttle_level, 70.0)


if __name__ == '__main__':
    unittest.main()
