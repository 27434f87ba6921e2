import unittest

from seqdnn import (
    EmptyAccumulatorError,
    InvalidConfigurationError,
    ProcessorStateError,
    SequenceLengthError,
    ShapeMismatchError,
    TimestepOutOfRangeError,
)


class TestEngineErrors(unittest.TestCase):
    def test_builtin_bases(self):
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(SequenceLengthError, ValueError))
        self.assertTrue(issubclass(TimestepOutOfRangeError, IndexError))
        self.assertTrue(issubclass(EmptyAccumulatorError, RuntimeError))
        self.assertTrue(issubclass(ProcessorStateError, RuntimeError))
        self.assertTrue(issubclass(InvalidConfigurationError, ValueError))

    def test_shape_mismatch_message(self):
        err = ShapeMismatchError((2, 3), [3], "weights")
        self.assertEqual(err.expected, (2, 3))
        self.assertEqual(err.actual, (3,))
        self.assertIn("weights", str(err))
        self.assertIn("(2, 3)", str(err))

    def test_sequence_length_message(self):
        err = SequenceLengthError(2, 5)
        self.assertEqual((err.errors_length, err.sequence_length), (2, 5))
        self.assertIn("does not reflect the length", str(err))

    def test_timestep_out_of_range(self):
        err = TimestepOutOfRangeError(7, 3)
        self.assertEqual((err.index, err.length), (7, 3))

    def test_processor_state_message(self):
        err = ProcessorStateError("backward", "idle", "Forward a sequence first.")
        self.assertEqual((err.op, err.state), ("backward", "idle"))
        self.assertEqual(
            str(err),
            "Cannot backward while the processor is idle. Forward a sequence first.",
        )


if __name__ == "__main__":
    unittest.main()
