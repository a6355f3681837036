"""Abstract key state consumed by the player controller.

The core never polls devices. A front end samples which keys are held each
frame and feeds them through an InputTracker, which adds the rising-edge
flags jump detection needs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InputSnapshot:
    """Keys held this frame, plus which jump keys went down this frame."""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    jump: bool = False  # Alternate jump button (space)
    up_pressed: bool = False
    jump_pressed: bool = False

    @property
    def horizontal(self) -> bool:
        """Whether either horizontal key is held."""
        return self.left or self.right

    @property
    def any_jump_pressed(self) -> bool:
        return self.up_pressed or self.jump_pressed


class InputTracker:
    """Builds snapshots from held keys, deriving rising edges frame to frame."""

    def __init__(self):
        self._prev_up = False
        self._prev_jump = False

    def sample(
        self,
        left: bool = False,
        right: bool = False,
        up: bool = False,
        down: bool = False,
        jump: bool = False,
    ) -> InputSnapshot:
        snapshot = InputSnapshot(
            left=left,
            right=right,
            up=up,
            down=down,
            jump=jump,
            up_pressed=up and not self._prev_up,
            jump_pressed=jump and not self._prev_jump,
        )
        self._prev_up = up
        self._prev_jump = jump
        return snapshot

    def reset(self) -> None:
        self._prev_up = False
        self._prev_jump = False
