from django.http import QueryDict

from projects.utils import parse_bracket_params, unwrap_project_payload


def test_parse_bracket_params_nests_keys():
    data = QueryDict(mutable=True)
    data["project[name]"] = "Shop"
    data["project[tasks_attributes][k1][title]"] = "Cart"
    data["project[tasks_attributes][k1][_destroy]"] = "1"
    data["plain"] = "x"

    assert parse_bracket_params(data) == {
        "project": {
            "name": "Shop",
            "tasks_attributes": {"k1": {"title": "Cart", "_destroy": "1"}},
        },
        "plain": "x",
    }


def test_repeated_key_last_value_wins():
    data = QueryDict("project[tasks_attributes][k][_destroy]=0&project[tasks_attributes][k][_destroy]=1")
    assert parse_bracket_params(data)["project"]["tasks_attributes"]["k"]["_destroy"] == "1"


def test_unwrap_accepts_plain_and_rooted_json():
    assert unwrap_project_payload({"name": "A"}) == {"name": "A"}
    assert unwrap_project_payload({"project": {"name": "A"}}) == {"name": "A"}
