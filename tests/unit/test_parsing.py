"""Unit tests for boolean annotation parsing"""

import pytest

from secretsync.utils.parsing import string_to_bool


class TestStringToBool:
    """Test boolean string parsing"""

    @pytest.mark.parametrize("value", ["1", "t", "T", "true", "TRUE", "True"])
    def test_true_values(self, value):
        """Test accepted true spellings"""
        assert string_to_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "false", "FALSE", "False"])
    def test_false_values(self, value):
        """Test accepted false spellings"""
        assert string_to_bool(value) is False

    @pytest.mark.parametrize("value", ["", "yes", "no", "2", " true", "truee"])
    def test_invalid_values(self, value):
        """Test anything else raises ValueError"""
        with pytest.raises(ValueError):
            string_to_bool(value)
