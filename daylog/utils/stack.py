# DAYLOG
# PER-DAY FILE LOGGING SERVICE

# COMPONENT: STACK SNAPSHOTS
# REQUIREMENTS SATISFIED: call-stack context for "with stack" log calls
"""
daylog/utils/stack.py

Captures the current call stack for inclusion in a log line.

The innermost STACK_SKIP_FRAMES frames are the logging call chain itself
(capture_stack, Logger._logf, the public log method) and are dropped.
The count is a constant: callers that wrap the Logger in further helper
layers will see those helper frames in the snapshot.
"""
import traceback
from typing import List, Sequence

STACK_SKIP_FRAMES = 3


def strip_stack_frames(frames: Sequence, depth: int) -> List:
    """Drop the `depth` innermost entries of an outermost-first frame list."""
    if depth <= 0:
        return list(frames)
    return list(frames[:-depth])


def capture_stack(depth: int = STACK_SKIP_FRAMES) -> str:
    # extract_stack() already leaves out its own frame
    frames = strip_stack_frames(traceback.extract_stack(), depth)
    return "".join(traceback.format_list(frames))
