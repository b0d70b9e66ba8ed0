#!/usr/bin/env python3

"""
Call Stack Emulator

The call stack is not part of system RAM.  Programs cannot see a stack pointer,
and nothing addresses the stack directly, so a bounded list is all we need.

Each entry is the address of the CALL instruction that created it.  RET jumps
back to that address and then continues with the following instruction.

Going deeper than the configured number of levels, or returning with nothing
on the stack, raises a StackError rather than touching memory that was never
reserved.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, address):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow: call depth exceeds {} levels".format(self.size))

        self.items.append(address)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow: return with an empty call stack") from None

    def depth(self):
        return len(self.items)

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return list(self.items)
