import pytest

from vaccelrt.errors import ErrorCode, VaccelError
from vaccelrt.optypes import Arg, OpType, op_type_str


def test_op_numbers_follow_source():
    assert op_type_str(0) == "noop"
    assert op_type_str(7) == "exec"
    assert op_type_str(15) == "MinMax"
    assert op_type_str(20) == "Exec with resource"
    assert op_type_str(23) == "OpenCV Generic"
    assert op_type_str(24) == "Functions NR"


def test_op_names():
    assert op_type_str(OpType.NO_OP) == "noop"
    assert op_type_str(OpType.IMG_CLASS) == "image classification"
    assert op_type_str(OpType.EXEC_WITH_RESOURCE) == "Exec with resource"
    assert op_type_str(OpType.FUNCTIONS_NR) == "Functions NR"


def test_plain_int_accepted():
    assert op_type_str(1) == op_type_str(OpType.BLAS_SGEMM)


def test_every_op_has_distinct_name():
    names = [op_type_str(op) for op in OpType]
    assert all(names)
    assert len(set(names)) == len(names)


@pytest.mark.parametrize("bad", [-1, 25, 1000])
def test_invalid_op_raises(bad):
    with pytest.raises(VaccelError) as info:
        op_type_str(bad)
    assert info.value.code == ErrorCode.EINVAL


def test_arg_size_defaults_to_length():
    data = b"abcdef"
    assert Arg(data).size == len(data)


def test_arg_explicit_size_kept():
    arg = Arg(bytearray(16), 4)
    assert arg.size == 4
    assert len(arg.buf) == 16


def test_arg_without_length_has_zero_size():
    assert Arg(None).size == 0