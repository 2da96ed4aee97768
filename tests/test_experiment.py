import pytest

from hmatrix.experiment import (
    get_non_negative_vector,
    get_sorted_random_vector,
    read_geometry_file,
)


def test_sorted_random_vector_length_and_range():
    values = get_sorted_random_vector(100)
    assert len(values) == 100
    assert all(0.0 <= v < 1.0 for v in values)


def test_sorted_random_vector_is_sorted():
    values = get_sorted_random_vector(50)
    assert values == sorted(values)


def test_sorted_random_vector_is_reproducible():
    first = get_sorted_random_vector(30)
    second = get_sorted_random_vector(30)
    assert len(first) == 30
    assert len(second) == 30
    assert first == second
    assert first[0] <= first[-1]


def test_sorted_random_vector_prefix_consistent():
    small = set(get_sorted_random_vector(10))
    large = set(get_sorted_random_vector(20))
    assert small <= large


def test_sorted_random_vector_empty():
    assert get_sorted_random_vector(0) == []


def test_non_negative_vector():
    assert get_non_negative_vector(4) == [0.0, 1.0, 2.0, 3.0]
    assert get_non_negative_vector(0) == []


def test_read_geometry_file(tmp_path):
    path = tmp_path / "points.txt"
    path.write_text("3 2\n0 1\n2 3\n4 5\n")
    assert read_geometry_file(path) == [[0.0, 2.0, 4.0], [1.0, 3.0, 5.0]]


def test_read_geometry_file_single_axis(tmp_path):
    path = tmp_path / "line.txt"
    path.write_text("2 1\n0.5\n1.5\n")
    assert read_geometry_file(str(path)) == [[0.5, 1.5]]


def test_read_geometry_file_too_short(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("3 2\n0 1\n")
    with pytest.raises(ValueError):
        read_geometry_file(path)


def test_read_geometry_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_geometry_file(tmp_path / "absent.txt")