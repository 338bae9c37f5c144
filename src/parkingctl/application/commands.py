# File: src/parkingctl/application/commands.py
"""
Command Dispatch for the Parking Registry

A command line has the form ``Name:arg1:arg2:...``. This module splits
such a line into a CommandLine and routes it to the matching
ParkingService operation.

Supported commands:
- CreateParkingSpot
- ParkVehicle
- FreeParkingSpot
- GetParkingSpotById
- GetParkingIntervalsByPlate (long alias:
  GetParkingIntervalsByParkingSpotIdAndRegistrationPlate)
- CalculateTotal
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence
import logging

from .dtos import OperationResult
from .parking_service import ParkingService

DEFAULT_SEPARATOR = ":"

Handler = Callable[[Sequence[str]], OperationResult]


@dataclass(frozen=True)
class CommandLine:
    """A tokenized input line: command name plus positional arguments"""
    name: str
    args: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, line: str, separator: str = DEFAULT_SEPARATOR) -> 'CommandLine':
        name, *args = line.rstrip("\r\n").split(separator)
        return cls(name, args)


class CommandDispatcher:
    """
    Routes command lines to service operations

    The dispatcher holds no registry of its own; all state lives in the
    ParkingService passed in.
    """

    def __init__(self, service: ParkingService, separator: str = DEFAULT_SEPARATOR):
        self.service = service
        self.separator = separator
        self.logger = logging.getLogger(self.__class__.__name__)

        self._handlers: Dict[str, Handler] = {
            "CreateParkingSpot": service.create_parking_spot,
            "ParkVehicle": service.park_vehicle,
            "FreeParkingSpot": service.free_parking_spot,
            "GetParkingSpotById": service.get_parking_spot_by_id,
            "GetParkingIntervalsByPlate": service.get_parking_intervals_by_plate,
            "GetParkingIntervalsByParkingSpotIdAndRegistrationPlate":
                service.get_parking_intervals_by_plate,
            "CalculateTotal": service.calculate_total,
        }

    @property
    def command_names(self) -> List[str]:
        return list(self._handlers)

    def execute(self, command: CommandLine) -> OperationResult:
        """Run a parsed command; unknown names yield an empty failed result"""
        handler = self._handlers.get(command.name)
        if handler is None:
            self.logger.warning(f"Unknown command: {command.name!r}")
            return OperationResult(False, "")

        self.logger.debug(f"Dispatching {command.name} with {len(command.args)} argument(s)")
        return handler(command.args)

    def dispatch(self, line: str) -> str:
        """Parse and run one input line, returning the text to print"""
        return self.execute(CommandLine.parse(line, self.separator)).message
