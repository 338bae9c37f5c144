#!/usr/bin/env python3
"""
Integration Tests for Command Sessions

Drive complete sessions through CommandDispatcher and ConsoleApplication,
checking the printed output line by line.
"""

import io
import os
import tempfile
import unittest
from unittest.mock import patch

from parkingctl.application.commands import CommandDispatcher, CommandLine
from parkingctl.application.parking_service import ParkingService
from parkingctl.config import AppConfig
from parkingctl.domain.aggregates import ParkingRegistry
from parkingctl.presentation.console import ConsoleApplication, main


def run_session(lines, config=None):
    """Run lines through a fresh console app and return (output, app)"""
    app = ConsoleApplication(config)
    output = io.StringIO()
    app.run(lines, output)
    return output.getvalue(), app


class TestCommandLine(unittest.TestCase):

    def test_parse(self):
        command = CommandLine.parse("ParkVehicle:1:CA1234AB:3:car\n")

        self.assertEqual(command.name, "ParkVehicle")
        self.assertEqual(command.args, ["1", "CA1234AB", "3", "car"])

    def test_parse_without_arguments(self):
        self.assertEqual(CommandLine.parse("CalculateTotal"), CommandLine("CalculateTotal", []))

    def test_custom_separator(self):
        command = CommandLine.parse("FreeParkingSpot|4", separator="|")
        self.assertEqual(command.args, ["4"])


class TestCommandDispatcher(unittest.TestCase):

    def setUp(self):
        self.registry = ParkingRegistry()
        self.dispatcher = CommandDispatcher(ParkingService(self.registry))

    def test_registration_scenario(self):
        self.assertEqual(
            self.dispatcher.dispatch("CreateParkingSpot:1:false:car:2.50"),
            "Parking spot 1 was successfully registered in the system!"
        )
        self.assertEqual(
            self.dispatcher.dispatch("ParkVehicle:1:CA1234AB:3:car"),
            "Vehicle CA1234AB parked at 1 for 3 hours."
        )
        self.assertTrue(self.registry.get(1).occupied)
        self.assertEqual(
            self.dispatcher.dispatch("CalculateTotal"),
            "Total revenue from the parking: 7.50 BGN"
        )

    def test_subscription_with_zero_price_not_registered(self):
        self.assertEqual(
            self.dispatcher.dispatch("CreateParkingSpot:2:false:subscription:0:AB1234CD"),
            "Unable to create parking spot!"
        )
        self.assertNotIn(2, self.registry)
        self.assertEqual(self.dispatcher.dispatch("GetParkingSpotById:2"), "Parking spot 2 not found!")

    def test_interval_query_aliases(self):
        self.dispatcher.dispatch("CreateParkingSpot:1:false:car:2")
        self.dispatcher.dispatch("ParkVehicle:1:CA1234AB:3:car")

        short = self.dispatcher.dispatch("GetParkingIntervalsByPlate:1:CA1234AB")
        long = self.dispatcher.dispatch(
            "GetParkingIntervalsByParkingSpotIdAndRegistrationPlate:1:CA1234AB"
        )
        self.assertEqual(short, long)
        self.assertTrue(short.startswith("Parking Spot #1\n"))

    def test_unknown_command(self):
        with self.assertLogs("CommandDispatcher", level="WARNING"):
            self.assertEqual(self.dispatcher.dispatch("Launch:1"), "")

    def test_command_names(self):
        self.assertIn("CalculateTotal", self.dispatcher.command_names)
        self.assertEqual(len(self.dispatcher.command_names), 7)


class TestConsoleSessions(unittest.TestCase):

    def test_full_session(self):
        lines = [
            "CreateParkingSpot:1:false:car:2.50",
            "CreateParkingSpot:2:false:bus:10",
            "CreateParkingSpot:3:false:subscription:5:AB1234CD",
            "CreateParkingSpot:1:true:bus:3",
            "ParkVehicle:1:CA1234AB:3:car",
            "ParkVehicle:2:CA1234AB:2:car",
            "ParkVehicle:3:ab1234cd:12:bus",
            "ParkVehicle:7:CA1234AB:1:car",
            "FreeParkingSpot:1",
            "FreeParkingSpot:1",
            "GetParkingSpotById:2",
            "GetParkingIntervalsByPlate:3:XX0000XX",
            "CalculateTotal",
            "End",
        ]

        output, _ = run_session(lines)

        self.assertEqual(output.splitlines(), [
            "Parking spot 1 was successfully registered in the system!",
            "Parking spot 2 was successfully registered in the system!",
            "Parking spot 3 was successfully registered in the system!",
            "Parking spot 1 is already registered!",
            "Vehicle CA1234AB parked at 1 for 3 hours.",
            "Vehicle CA1234AB can't park at 2.",
            "Vehicle ab1234cd parked at 3 for 12 hours.",
            "Parking spot 7 not found!",
            "Parking spot 1 is now free!",
            "Parking spot 1 is not occupied.",
            "Parking Spot #2",
            "Occupied: False",
            "Type: bus",
            "Price per hour: 10.00 BGN",
            "No parking intervals found for vehicle with registration plate XX0000XX on parking spot 3.",
            "Total revenue from the parking: 7.50 BGN",
        ])

    def test_malformed_command_does_not_end_session(self):
        output, app = run_session([
            "CreateParkingSpot:1:maybe:car:2",
            "ParkVehicle",
            "CreateParkingSpot:1:false:car:2",
            "GetParkingSpotById:1",
        ])

        lines = output.splitlines()
        self.assertEqual(lines[0], "Unable to create parking spot!")
        self.assertEqual(lines[1], "Unable to park vehicle!")
        self.assertEqual(lines[2], "Parking spot 1 was successfully registered in the system!")
        self.assertEqual(len(app.service.registry), 1)

    def test_stops_at_sentinel(self):
        output, app = run_session([
            "CreateParkingSpot:1:false:car:2\n",
            "End\n",
            "CreateParkingSpot:2:false:car:2\n",
        ])

        self.assertEqual(output.count("\n"), 1)
        self.assertNotIn(2, app.service.registry)

    def test_end_of_input_without_sentinel(self):
        output, _ = run_session(["CalculateTotal"])
        self.assertEqual(output, "Total revenue from the parking: 0.00 BGN\n")

    def test_configured_sentinel_and_separator(self):
        config = AppConfig(sentinel="Quit", separator="|")
        output, _ = run_session(["CreateParkingSpot|1|false|car|2", "Quit", "CalculateTotal"], config)

        self.assertEqual(output, "Parking spot 1 was successfully registered in the system!\n")

    def test_repeated_lookup_is_stable(self):
        output, _ = run_session([
            "CreateParkingSpot:1:true:bus:4.5",
            "GetParkingSpotById:1",
            "GetParkingSpotById:1",
        ])

        blocks = output.split("\n")[1:9]
        self.assertEqual(blocks[:4], blocks[4:])


class TestMainEntryPoint(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_main_reads_input_file(self):
        path = os.path.join(self.temp_dir.name, "commands.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("CreateParkingSpot:1:false:car:2.50\nParkVehicle:1:CA1234AB:3:car\nCalculateTotal\nEnd\n")

        stdout = io.StringIO()
        with patch("sys.stdout", stdout), patch("sys.stderr", io.StringIO()):
            exit_code = main(["--input", path, "--log-level", "WARNING"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(stdout.getvalue().splitlines()[-1], "Total revenue from the parking: 7.50 BGN")

    def test_main_reads_stdin_with_config(self):
        config_path = os.path.join(self.temp_dir.name, "config.yaml")
        with open(config_path, "w") as f:
            f.write("sentinel: Stop\nlog_level: ERROR\n")

        stdout = io.StringIO()
        stdin = io.StringIO("CalculateTotal\nStop\nCalculateTotal\n")
        with patch("sys.stdin", stdin), patch("sys.stdout", stdout), patch("sys.stderr", io.StringIO()):
            exit_code = main(["--config", config_path])

        self.assertEqual(exit_code, 0)
        self.assertEqual(stdout.getvalue(), "Total revenue from the parking: 0.00 BGN\n")

    def test_main_missing_config_exits(self):
        with patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--config", os.path.join(self.temp_dir.name, "nope.yaml")])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == '__main__':
    unittest.main()
