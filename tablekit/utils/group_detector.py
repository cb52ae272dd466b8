#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: TableKit
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Group Transition Detection.

A grouped column marks runs of equal values. For every row, each grouped
column reports whether a run starts, ends, both, or neither on that row.
Detection only looks at the previous and next rows, plus a small per-row
state (`GroupState`) that makes transitions cascade from outer levels to
inner ones: when level 0 ends on a row, every deeper level ends too.

Classes:
    GroupTransition: Closed enumeration of the four possible outcomes
    GroupState: Lowest ended/started levels seen so far on the current row

Functions:
    detect_transition: Compute the transition of one grouped cell
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from tablekit.utils.render_constants import NO_RESET_GROUP


class GroupTransition(Enum):
    """Group boundary outcome of a grouped cell on a given row."""
    NONE = 'none'
    START = 'start'
    END = 'end'
    START_AND_END = 'start_and_end'

    @classmethod
    def combine(cls, started: bool, ended: bool) -> "GroupTransition":
        if started and ended:
            return cls.START_AND_END
        if started:
            return cls.START
        if ended:
            return cls.END
        return cls.NONE

    @property
    def starts(self) -> bool:
        return self in (GroupTransition.START, GroupTransition.START_AND_END)

    @property
    def ends(self) -> bool:
        return self in (GroupTransition.END, GroupTransition.START_AND_END)


@dataclass
class GroupState:
    """Per-row detection state, reset before each row's columns are examined."""
    lowest_ended_level: int = NO_RESET_GROUP
    lowest_started_level: int = NO_RESET_GROUP

    def reset(self) -> None:
        self.lowest_ended_level = NO_RESET_GROUP
        self.lowest_started_level = NO_RESET_GROUP


def detect_transition(
    value: str,
    previous: Optional[str],
    next_value: Optional[str],
    level: int,
    state: GroupState,
) -> GroupTransition:
    """
    Compute the group transition of a cell and update the row state.

    Columns must be examined in ordinal order with the same `state` for the
    whole row. `None` for previous/next means there is no such row; an empty
    string is an ordinary value.

    Args:
        value: Raw value of the cell
        previous: Raw value of the same column in the previous row, or None
        next_value: Raw value of the same column in the next row, or None
        level: Grouping level of the column
        state: Row state shared by the grouped columns of the current row

    Returns:
        The GroupTransition for this cell

    Example:
        >>> state = GroupState()
        >>> detect_transition('A', None, 'A', 0, state)
        <GroupTransition.START: 'start'>
    """
    ended = False
    if state.lowest_ended_level < level:
        # an outer group already ended on this row
        ended = True
    elif next_value is None or next_value != value:
        ended = True
        state.lowest_ended_level = level

    started = False
    if state.lowest_started_level < level:
        started = True
    elif previous is None or previous != value:
        started = True
        state.lowest_started_level = level

    return GroupTransition.combine(started, ended)
