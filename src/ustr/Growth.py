#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# Capacity of the first allocation, in units
MIN_CAPACITY = 8


def nextCapacity(current, required):
    """
    Return the capacity to grow to so that at least required units fit.
    Starts at MIN_CAPACITY and doubles; never returns less than current.
    """
    current = int(current)
    required = int(required)
    if required <= current:
        return current
    cap = MIN_CAPACITY if current == 0 else current
    while cap < required:
        cap *= 2
    return cap
