#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from nchip.constants import DEFAULT_KEYMAP
from nchip.inputs.i_null import Inputs, InputsError, parse_codes
from nchip.renderers.r_null import Renderer


class FakeTicker:
    def __init__(self):
        self.calls = []

    def toggle_debug(self):
        self.calls.append("debug")

    def request_step(self):
        self.calls.append("step")

    def toggle_pause(self):
        self.calls.append("pause")


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.renderer = Renderer()

    def test_inputs_default_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])
        self.assertEqual(0x1, inputs.keymap_dict[ord("1")])
        self.assertEqual(0xC, inputs.keymap_dict[ord("4")])
        self.assertEqual(0xF, inputs.keymap_dict[ord("v")])
        self.assertEqual(
            {ord("i"): "debug", ord("o"): "step", ord("p"): "pause"},
            inputs.controls_dict
        )

    def test_inputs_lowercase(self):
        keymap = ",".join(str(code) for code in range(65, 81))  # A to P
        inputs = Inputs(keymap, self.renderer, controls="48,57,56", force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("a")])
        self.assertEqual(0xF, inputs.keymap_dict[ord("p")])

    def test_inputs_bad_keymaps(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", self.renderer)
        self.assertRaises(InputsError, Inputs, ",".join(["1"] * 16), self.renderer)
        self.assertRaises(InputsError, Inputs, DEFAULT_KEYMAP.replace("120", "abc"), self.renderer)

    def test_inputs_bad_controls(self):
        # 'x' is already key 0
        self.assertRaises(InputsError, Inputs, DEFAULT_KEYMAP, self.renderer, "120,111,112")
        self.assertRaises(InputsError, Inputs, DEFAULT_KEYMAP, self.renderer, "105,105,112")
        self.assertRaises(InputsError, Inputs, DEFAULT_KEYMAP, self.renderer, "105,111")

    def test_inputs_parse_codes(self):
        self.assertEqual([97, 98], parse_codes("65,98", 2, "keys", force_lowercase=True))
        self.assertEqual([65, 98], parse_codes("65,98", 2, "keys"))

    def test_inputs_null_never_quits(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        self.assertFalse(inputs.process_messages(FakeTicker()))

    def test_inputs_apply_control(self):
        inputs = Inputs(DEFAULT_KEYMAP, self.renderer)
        ticker = FakeTicker()

        for control_name in "pause", "step", "debug":
            inputs.apply_control(ticker, control_name)

        self.assertEqual(["pause", "step", "debug"], ticker.calls)
