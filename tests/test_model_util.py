from types import SimpleNamespace

from camperception.model_util import add_shape, get_blob_names


def _blobs():
    return [
        SimpleNamespace(name="data", shape=[1, 3, 224, 224]),
        SimpleNamespace(name="prob", shape=[1, 1000]),
    ]


def test_get_blob_names_in_order():
    assert get_blob_names(_blobs()) == ["data", "prob"]


def test_get_blob_names_empty():
    assert get_blob_names([]) == []


def test_add_shape_fills_map():
    shapes = {}
    add_shape(shapes, _blobs())
    assert shapes == {"data": [1, 3, 224, 224], "prob": [1, 1000]}


def test_add_shape_keeps_existing():
    shapes = {"data": [9]}
    add_shape(shapes, _blobs())
    assert shapes["data"] == [9]
    assert shapes["prob"] == [1, 1000]


def test_add_shape_first_duplicate_wins():
    shapes = {}
    add_shape(shapes, [SimpleNamespace(name="x", shape=[1]),
                       SimpleNamespace(name="x", shape=[2])])
    assert shapes == {"x": [1]}