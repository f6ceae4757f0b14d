import pytest

from docquery.registry import Registry
from sample_models import User


def _write(tmp_path, text):
    path = tmp_path / "entities.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_and_resolve(tmp_path):
    path = _write(
        tmp_path,
        "entities:\n"
        "  users:\n"
        "    model: sample_models:User\n"
        "    maxPageSize: 20\n"
        "  orders: {}\n",
    )
    reg = Registry(path, max_page_size=1000)
    reg.load_entities()
    assert reg.ensure_entity("users") == {"model": User, "maxPageSize": 20}
    assert reg.ensure_entity("orders") == {"model": dict, "maxPageSize": 1000}


def test_unknown_entity(tmp_path):
    reg = Registry(_write(tmp_path, "entities: {}\n"))
    reg.load_entities()
    with pytest.raises(KeyError):
        reg.ensure_entity("nope")


def test_missing_file(tmp_path):
    with pytest.raises(RuntimeError):
        Registry(tmp_path / "absent.yaml").load_entities()


def test_refresh_reports_bad_models(tmp_path):
    path = _write(
        tmp_path,
        "entities:\n"
        "  users:\n"
        "    model: sample_models:User\n"
        "  broken:\n"
        "    model: no_such_module_here:Thing\n",
    )
    reg = Registry(path)
    summary = reg.refresh_all()
    assert summary["users"] == "ok (User)"
    assert summary["broken"].startswith("error:")
