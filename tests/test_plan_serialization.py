# tests/test_plan_serialization.py

import json

from serviceadapter.plans.emit import encode_plan, encode_plan_yaml, plan_to_dict
from serviceadapter.plans.load import decode_plan, decode_plan_yaml
from serviceadapter.plans.types import InstanceGroup, Job, Plan

PLAN_JSON = """
{
  "instance_groups": [
    {
      "name": "example-server",
      "vm_type": "small",
      "persistent_disk_type": "ten",
      "networks": ["example-network"],
      "azs": ["example-az"],
      "instances": 1,
      "lifecycle": "errand",
      "jobs": [
        {
          "name": "kafka",
          "release": "1.3",
          "properties": {
            "example_bool": true,
            "example_number": 2,
            "example_string": "thing"
          }
        }
      ]
    }
  ],
  "properties": {
    "example": "property"
  }
}
"""


def _full_plan():
    return Plan(
        instance_groups=[
            InstanceGroup(
                name="example-server",
                vm_type="small",
                persistent_disk_type="ten",
                networks=["example-network"],
                azs=["example-az"],
                instances=1,
                lifecycle="errand",
                jobs=[
                    Job(
                        name="kafka",
                        release="1.3",
                        properties={
                            "example_bool": True,
                            "example_number": 2.0,
                            "example_string": "thing",
                        },
                    )
                ],
            )
        ],
        properties={"example": "property"},
    )


def _mandatory_plan():
    return Plan(
        instance_groups=[
            InstanceGroup(
                name="example-server",
                vm_type="small",
                networks=["example-network"],
                instances=1,
            )
        ],
        properties={},
    )


def test_decodes_plan_with_all_optional_fields():
    assert decode_plan(PLAN_JSON) == _full_plan()


def test_encodes_plan_with_all_optional_fields():
    assert json.loads(encode_plan(_full_plan())) == json.loads(PLAN_JSON)


def test_encodes_plan_with_only_mandatory_fields():
    expected = {
        "instance_groups": [
            {
                "name": "example-server",
                "vm_type": "small",
                "networks": ["example-network"],
                "instances": 1,
            }
        ],
        "properties": {},
    }
    assert json.loads(encode_plan(_mandatory_plan())) == expected


def test_field_order_is_stable():
    d = plan_to_dict(_full_plan())
    assert list(d) == ["instance_groups", "properties"]
    assert list(d["instance_groups"][0]) == [
        "name",
        "vm_type",
        "persistent_disk_type",
        "networks",
        "azs",
        "instances",
        "lifecycle",
        "jobs",
    ]
    assert list(d["instance_groups"][0]["jobs"][0]) == ["name", "release", "properties"]


def test_empty_optional_fields_are_omitted():
    plan = _mandatory_plan()
    group = plan.instance_groups[0]
    group.persistent_disk_type = ""
    group.lifecycle = ""
    group.azs = []
    group.jobs = []

    encoded = plan_to_dict(plan)["instance_groups"][0]

    for key in ("persistent_disk_type", "azs", "lifecycle", "jobs"):
        assert key not in encoded


def test_empty_properties_encode_as_empty_object():
    plan = _mandatory_plan()
    plan.instance_groups[0].jobs = [Job(name="broker", release="kafka", properties={})]

    text = encode_plan(plan)
    doc = json.loads(text)

    assert doc["properties"] == {}
    assert doc["instance_groups"][0]["jobs"][0]["properties"] == {}
    assert "null" not in text


def test_undefined_plan_properties_encode_as_empty_object():
    plan = _mandatory_plan()
    plan.properties = None

    assert json.loads(encode_plan(plan))["properties"] == {}


def test_undefined_job_properties_stay_undefined_through_roundtrip():
    plan = _mandatory_plan()
    plan.instance_groups[0].jobs = [Job(name="broker", release="kafka")]

    decoded = decode_plan(encode_plan(plan))

    assert decoded.instance_groups[0].jobs[0].properties is None


def test_missing_properties_decode_as_undefined():
    plan = decode_plan(
        '{"instance_groups": [{"name": "a", "vm_type": "b", "networks": ["n"], "instances": 1,'
        ' "jobs": [{"name": "j", "release": "r"}]}]}'
    )
    assert plan.properties is None
    assert plan.instance_groups[0].jobs[0].properties is None


def test_numbers_in_properties_decode_as_floats():
    plan = decode_plan(
        '{"instance_groups": [], "properties": {"n": 2, "nested": {"m": [1, 2.5, true]}, "flag": false}}'
    )
    props = plan.properties

    assert isinstance(props["n"], float)
    assert props["nested"]["m"] == [1.0, 2.5, True]
    assert all(isinstance(v, float) for v in props["nested"]["m"][:2])
    assert props["nested"]["m"][2] is True
    assert props["flag"] is False


def test_unknown_fields_are_ignored():
    plan = decode_plan(
        '{"instance_groups": [{"name": "a", "vm_type": "b", "networks": ["n"], "instances": 2,'
        ' "migrated_from": [{"name": "old"}]}], "properties": {}, "update": {"canaries": 1}}'
    )
    assert plan.instance_groups[0] == InstanceGroup(name="a", vm_type="b", networks=["n"], instances=2)


def test_missing_and_empty_azs_decode_the_same():
    base = '{"instance_groups": [{"name": "a", "vm_type": "b", "networks": ["n"], "instances": 1%s}]}'
    assert decode_plan(base % "") == decode_plan(base % ', "azs": []')


def test_roundtrip_preserves_plan():
    for plan in (_full_plan(), _mandatory_plan()):
        assert decode_plan(encode_plan(plan)) == plan


def test_yaml_decodes_same_plan_as_json():
    text = encode_plan_yaml(_full_plan())

    assert text.startswith("instance_groups:")
    assert decode_plan_yaml(text) == decode_plan(PLAN_JSON)
