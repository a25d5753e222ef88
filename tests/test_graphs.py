import json

import pytest

from showercalib.graphs import (
    CalibrationFileError,
    CalibrationGraph,
    find_file,
    read_calibration_directory,
    split_calibration_path,
    verify_order,
    write_calibration_directory,
)


def _graph(name="Pi0", x=(0.0, 1.0, 2.0), y=(1.1, 1.2, 1.0)):
    return CalibrationGraph(
        name=name, x=x, y=y, ex=(0.05,) * len(x), ey=tuple(v * 0.1 for v in y)
    )


@pytest.mark.parametrize(
    "path, expected",
    [
        ("path/to/file.json:Calibrations/Shower", ("path/to/file.json", "Calibrations/Shower")),
        ("file.json", ("file.json", "")),
        ("file.json/dir", ("file.json", "dir")),
        ("data.json/calib.json:A", ("data.json/calib.json", "A")),
        ("calib.json:A.jsonx", ("calib.json", "A.jsonx")),
        ("calib.jsonx", ("", "")),
        ("no_suffix:dir", ("", "")),
    ],
)
def test_split_calibration_path(path, expected):
    assert split_calibration_path(path) == expected


def test_graph_fills_missing_errors_with_zero():
    graph = CalibrationGraph(name="g", x=(1, 2), y=(3, 4))
    assert graph.ex == (0.0, 0.0)
    assert graph.ey == (0.0, 0.0)
    assert len(graph) == 2


def test_graph_size_mismatch():
    with pytest.raises(ValueError):
        CalibrationGraph(name="g", x=(1.0, 2.0), y=(1.0,))


def test_verify_order_unsorted():
    graph = _graph(name="Muon", x=(0.0, 2.0, 1.0))
    with pytest.raises(CalibrationFileError, match="'Muon' are not sorted"):
        verify_order(graph)


def test_verify_order_no_graph():
    with pytest.raises(CalibrationFileError, match="invalid graph"):
        verify_order(None)


def test_round_trip(tmp_path):
    graphs = [_graph("Pi0"), _graph("Default", x=(1.1,), y=(1.1,))]
    location = f"{tmp_path}/sub/calib.json:Showers/ByType"
    written = write_calibration_directory(location, graphs)
    assert written.exists()
    directory = read_calibration_directory(location, search_path=[])
    assert sorted(directory.names()) == ["Default", "Pi0"]
    assert directory.graph("Pi0") == graphs[0]
    assert directory.graph("Default") == graphs[1]


def test_update_keeps_other_directories(tmp_path):
    file_path = tmp_path / "calib.json"
    write_calibration_directory(f"{file_path}:A", [_graph("Photon")])
    write_calibration_directory(f"{file_path}:B", [_graph("Electron")])
    assert read_calibration_directory(f"{file_path}:A", []).names() == ["Photon"]
    assert read_calibration_directory(f"{file_path}:B", []).names() == ["Electron"]


def test_root_directory(tmp_path):
    file_path = tmp_path / "calib.json"
    write_calibration_directory(str(file_path), [_graph("Muon")])
    assert read_calibration_directory(str(file_path), []).graph("Muon") == _graph("Muon")


def test_read_missing_file(tmp_path):
    with pytest.raises(CalibrationFileError, match="can't read"):
        read_calibration_directory(f"{tmp_path}/absent.json:Dir", [])


def test_read_without_suffix(tmp_path):
    with pytest.raises(CalibrationFileError):
        read_calibration_directory(f"{tmp_path}/calibration", [])


def test_read_missing_directory(tmp_path):
    file_path = tmp_path / "calib.json"
    write_calibration_directory(f"{file_path}:A", [_graph()])
    with pytest.raises(CalibrationFileError, match="can't find 'Z'"):
        read_calibration_directory(f"{file_path}:Z", [])


def test_missing_object(tmp_path):
    file_path = tmp_path / "calib.json"
    write_calibration_directory(f"{file_path}:A", [_graph("Pi0")])
    directory = read_calibration_directory(f"{file_path}:A", [])
    with pytest.raises(CalibrationFileError, match="No object 'Photon'"):
        directory.graph("Photon")


def test_object_of_wrong_type(tmp_path):
    file_path = tmp_path / "calib.json"
    file_path.write_text(
        json.dumps(
            {"type": "directory", "entries": {"Pi0": {"type": "histogram"}}}
        ),
        encoding="utf-8",
    )
    directory = read_calibration_directory(str(file_path), [])
    with pytest.raises(CalibrationFileError, match="is a histogram"):
        directory.graph("Pi0")


def test_malformed_file(tmp_path):
    file_path = tmp_path / "calib.json"
    file_path.write_text("not json", encoding="utf-8")
    with pytest.raises(CalibrationFileError):
        read_calibration_directory(str(file_path), [])


def test_write_without_suffix(tmp_path):
    with pytest.raises(CalibrationFileError):
        write_calibration_directory(f"{tmp_path}/calib.txt", [_graph()])


def test_find_file_in_search_path(tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    found_dir = tmp_path / "found"
    found_dir.mkdir()
    (found_dir / "calib.json").write_text("{}", encoding="utf-8")
    result = find_file("calib.json", [str(other), str(found_dir)])
    assert result == str(found_dir / "calib.json")


def test_find_file_fallback():
    assert find_file("nowhere/calib.json", []) == "nowhere/calib.json"


def test_find_file_from_environment(tmp_path, monkeypatch):
    (tmp_path / "calib.json").write_text("{}", encoding="utf-8")
    monkeypatch.setenv("FW_SEARCH_PATH", str(tmp_path))
    assert find_file("calib.json") == str(tmp_path / "calib.json")


def test_read_through_search_path(tmp_path):
    write_calibration_directory(f"{tmp_path}/calib.json:Showers", [_graph("Pi0")])
    directory = read_calibration_directory("calib.json:Showers", [str(tmp_path)])
    assert directory.graph("Pi0") == _graph("Pi0")