import base64
import dataclasses

import pytest

from conftest import ADDR_A, ADDR_B, PUBLIC_KEY
from pokt_sdk.errors import InvalidAmountError, InvalidFieldError, MissingFieldError
from pokt_sdk.tx.models import (
    APP_TRANSFER_KEY,
    REWARD_DELEGATOR_KEY,
    DAOAction,
    GovParameter,
    MsgKind,
)
from pokt_sdk.tx.msgs import (
    ALL_MSG_TYPES,
    MsgProtoAppStake,
    MsgProtoAppTransfer,
    MsgProtoAppUnstake,
    MsgProtoGovChangeParam,
    MsgProtoGovDAOTransfer,
    MsgProtoGovUpgrade,
    MsgProtoNodeStakeTx,
    MsgProtoNodeUnjail,
    MsgProtoNodeUnstake,
    MsgProtoSend,
    normalize_service_url,
)
from pokt_sdk.utils.proto import encode_any

PUBKEY_AMINO = {"type": "crypto/ed25519_public_key", "value": PUBLIC_KEY}


def _node_stake(**kw):
    args = dict(
        node_pub_key=PUBLIC_KEY,
        output_address=ADDR_A,
        chains=("0001", "0021"),
        amount="15000000000",
        service_url="https://node1.example.com",
    )
    args.update(kw)
    return MsgProtoNodeStakeTx(**args)


# ---------- model-wide ----------


def test_every_variant_has_a_distinct_kind():
    kinds = [cls.KIND for cls in ALL_MSG_TYPES]
    assert len(set(kinds)) == len(kinds) == len(MsgKind)


def test_messages_are_immutable():
    msg = MsgProtoSend(ADDR_A, ADDR_B, "1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.amount = "2"  # type: ignore[misc]
    assert msg.kind is MsgKind.SEND


def test_to_proto_any_wraps_payload_with_type_url():
    msg = MsgProtoAppUnstake(ADDR_A)
    assert msg.to_proto_any() == encode_any("/x.apps.MsgBeginUnstake", msg.encode())


# ---------- send ----------


def test_send_sign_doc_and_encoding():
    msg = MsgProtoSend(ADDR_A.upper(), ADDR_B, "1000000")
    assert msg.to_sign_doc_obj() == {
        "type": "pos/Send",
        "value": {"amount": "1000000", "from_address": ADDR_A, "to_address": ADDR_B},
    }
    expected = (
        b"\x0a\x14" + bytes.fromhex(ADDR_A) + b"\x12\x14" + bytes.fromhex(ADDR_B) + b"\x1a\x071000000"
    )
    assert msg.encode() == expected


def test_send_to_self_is_rejected():
    with pytest.raises(InvalidFieldError):
        MsgProtoSend(ADDR_A, ADDR_A.upper(), "1")


@pytest.mark.parametrize("amount", ["0", "-5", "1.5", "1e6", "abc", " 10", 10, "0001000", "00"])
def test_send_rejects_bad_amounts(amount):
    with pytest.raises(InvalidAmountError):
        MsgProtoSend(ADDR_A, ADDR_B, amount)


def test_send_missing_fields():
    with pytest.raises(MissingFieldError):
        MsgProtoSend(ADDR_A, "", "1")
    with pytest.raises(MissingFieldError):
        MsgProtoSend(ADDR_A, ADDR_B, "")


def test_send_rejects_malformed_address():
    with pytest.raises(InvalidFieldError):
        MsgProtoSend("not-an-address", ADDR_B, "1")


# ---------- apps ----------


def test_app_stake_sign_doc():
    msg = MsgProtoAppStake(PUBLIC_KEY, ["0001", "0040"], "1000000")
    assert msg.chains == ("0001", "0040")
    assert msg.to_sign_doc_obj() == {
        "type": "apps/MsgAppStake",
        "value": {"chains": ["0001", "0040"], "pubkey": PUBKEY_AMINO, "value": "1000000"},
    }


def test_app_stake_single_chain_string_is_one_chain():
    assert MsgProtoAppStake(PUBLIC_KEY, "0001", "1").chains == ("0001",)


def test_app_stake_requires_chains_and_valid_pubkey():
    with pytest.raises(MissingFieldError):
        MsgProtoAppStake(PUBLIC_KEY, [], "1")
    with pytest.raises(InvalidFieldError):
        MsgProtoAppStake(PUBLIC_KEY[:-2], ["0001"], "1")


def test_app_stake_encoding():
    msg = MsgProtoAppStake(PUBLIC_KEY, ["0001"], "5")
    assert msg.encode() == b"\x0a\x20" + bytes.fromhex(PUBLIC_KEY) + b"\x12\x040001" + b"\x1a\x015"


def test_app_transfer_reuses_stake_message_with_no_chains():
    msg = MsgProtoAppTransfer(PUBLIC_KEY)
    assert msg.to_sign_doc_obj() == {
        "type": "apps/MsgAppStake",
        "value": {"chains": None, "pubkey": PUBKEY_AMINO, "value": "0"},
    }
    assert msg.KEY == MsgProtoAppStake.KEY
    # "0" is not the proto3 default for strings, so it is still written
    assert msg.encode() == b"\x0a\x20" + bytes.fromhex(PUBLIC_KEY) + b"\x1a\x010"
    assert msg.required_features() == frozenset({APP_TRANSFER_KEY})
    assert msg.kind is MsgKind.APP_TRANSFER


def test_app_unstake():
    msg = MsgProtoAppUnstake(ADDR_B)
    assert msg.to_sign_doc_obj() == {
        "type": "apps/MsgAppBeginUnstake",
        "value": {"application_address": ADDR_B},
    }
    assert msg.encode() == b"\x0a\x14" + bytes.fromhex(ADDR_B)


# ---------- nodes ----------


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://node1.example.com", "https://node1.example.com:443"),
        ("http://node1.example.com", "http://node1.example.com:80"),
        ("https://node1.example.com:8081/", "https://node1.example.com:8081"),
        ("HTTPS://Node1.Example.com", "https://node1.example.com:443"),
    ],
)
def test_service_url_normalization(url, expected):
    assert normalize_service_url(url) == expected


@pytest.mark.parametrize("url", ["ftp://node1.example.com", "node1.example.com", "https://", "https://h:99999"])
def test_service_url_rejects(url):
    with pytest.raises(InvalidFieldError):
        normalize_service_url(url)


def test_node_stake_sign_doc_without_delegators():
    msg = _node_stake()
    assert msg.to_sign_doc_obj() == {
        "type": "pos/8.0MsgStake",
        "value": {
            "chains": ["0001", "0021"],
            "output_address": ADDR_A,
            "public_key": PUBKEY_AMINO,
            "service_url": "https://node1.example.com:443",
            "value": "15000000000",
        },
    }
    assert msg.required_features() == frozenset()


def test_node_stake_with_delegators():
    msg = _node_stake(reward_delegators={ADDR_B: 30, ADDR_A: 50})
    value = msg.sign_doc_value()
    assert value["reward_delegators"] == {ADDR_A: 50, ADDR_B: 30}
    assert msg.required_features() == frozenset({REWARD_DELEGATOR_KEY})

    encoded = msg.encode()
    entry_a = b"\x0a\x28" + ADDR_A.encode() + b"\x10\x32"
    entry_b = b"\x0a\x28" + ADDR_B.encode() + b"\x10\x1e"
    tail = b"\x32\x2c" + entry_a + b"\x32\x2c" + entry_b
    assert encoded.endswith(tail)


def test_node_stake_empty_delegators_map_needs_no_feature():
    msg = _node_stake(reward_delegators={})
    assert "reward_delegators" not in msg.sign_doc_value()
    assert msg.required_features() == frozenset()


@pytest.mark.parametrize(
    "delegators",
    [{ADDR_B: 0}, {ADDR_B: 101}, {ADDR_B: 60, ADDR_A: 41}, {"xyz": 10}, {ADDR_B: True}, {ADDR_B: 1.5}],
)
def test_node_stake_rejects_bad_delegators(delegators):
    with pytest.raises(InvalidFieldError):
        _node_stake(reward_delegators=delegators)


def test_node_stake_encoding_field_order():
    msg = _node_stake(chains=("0001",), amount="1", service_url="http://a.io")
    expected = (
        b"\x0a\x20" + bytes.fromhex(PUBLIC_KEY)
        + b"\x12\x040001"
        + b"\x1a\x011"
        + b"\x22\x0ehttp://a.io:80"
        + b"\x2a\x14" + bytes.fromhex(ADDR_A)
    )
    assert msg.encode() == expected


def test_node_unstake_and_unjail_sign_docs():
    unstake = MsgProtoNodeUnstake(ADDR_A, ADDR_B)
    assert unstake.to_sign_doc_obj() == {
        "type": "pos/8.0MsgBeginUnstake",
        "value": {"signer_address": ADDR_B, "validator_address": ADDR_A},
    }
    unjail = MsgProtoNodeUnjail(ADDR_A, ADDR_B)
    assert unjail.to_sign_doc_obj() == {
        "type": "pos/8.0MsgUnjail",
        "value": {"address": ADDR_A, "signer_address": ADDR_B},
    }
    body = b"\x0a\x14" + bytes.fromhex(ADDR_A) + b"\x12\x14" + bytes.fromhex(ADDR_B)
    assert unstake.encode() == unjail.encode() == body
    assert unstake.KEY == "/x.nodes.MsgBeginUnstake8"
    assert unjail.KEY == "/x.nodes.MsgUnjail8"


def test_node_unstake_requires_signer():
    with pytest.raises(MissingFieldError):
        MsgProtoNodeUnstake(ADDR_A, "")


# ---------- governance ----------


def test_dao_transfer_coerces_action():
    msg = MsgProtoGovDAOTransfer(ADDR_A, ADDR_B, "100", "dao_transfer")
    assert msg.action is DAOAction.TRANSFER
    assert msg.to_sign_doc_obj() == {
        "type": "gov/msg_dao_transfer",
        "value": {"action": "dao_transfer", "amount": "100", "from_address": ADDR_A, "to_address": ADDR_B},
    }
    assert msg.encode().endswith(b"\x22\x0cdao_transfer")


def test_dao_burn_may_omit_recipient():
    msg = MsgProtoGovDAOTransfer(ADDR_A, "", "100", DAOAction.BURN)
    assert msg.sign_doc_value()["to_address"] == ""
    assert msg.encode() == b"\x0a\x14" + bytes.fromhex(ADDR_A) + b"\x1a\x03100" + b"\x22\x08dao_burn"


def test_dao_transfer_requires_recipient_and_known_action():
    with pytest.raises(MissingFieldError):
        MsgProtoGovDAOTransfer(ADDR_A, "", "100", DAOAction.TRANSFER)
    with pytest.raises(InvalidFieldError):
        MsgProtoGovDAOTransfer(ADDR_A, ADDR_B, "100", "dao_mint")


def test_change_param_encodes_canonical_json_value():
    msg = MsgProtoGovChangeParam(ADDR_A, GovParameter.MAX_MEMO_CHARACTERS, "20")
    assert msg.param_key == "auth/MaxMemoCharacters"
    assert msg.value_bytes() == b'"20"'
    assert msg.to_sign_doc_obj() == {
        "type": "gov/msg_change_param",
        "value": {"address": ADDR_A, "param_key": "auth/MaxMemoCharacters", "param_value": "IjIwIg=="},
    }
    assert msg.encode() == (
        b"\x0a\x14" + bytes.fromhex(ADDR_A) + b"\x12\x16auth/MaxMemoCharacters" + b"\x1a\x04" + b'"20"'
    )


def test_change_param_structured_value_is_sorted():
    msg = MsgProtoGovChangeParam(ADDR_A, "gov/acl", {"z": 1, "a": [2, 1]})
    assert msg.value_bytes() == b'{"a":[2,1],"z":1}'
    assert base64.b64decode(msg.sign_doc_value()["param_value"]) == msg.value_bytes()


def test_change_param_whitelist():
    with pytest.raises(InvalidFieldError):
        MsgProtoGovChangeParam(ADDR_A, "pos/NotAParam", "1")
    msg = MsgProtoGovChangeParam(ADDR_A, "pos/NotAParam", "1", override_gov_params_whitelist_validation=True)
    assert msg.param_key == "pos/NotAParam"


def test_change_param_rejects_unrenderable_value():
    with pytest.raises(InvalidFieldError):
        MsgProtoGovChangeParam(ADDR_A, "gov/acl", {1, 2})
    with pytest.raises(MissingFieldError):
        MsgProtoGovChangeParam(ADDR_A, "gov/acl", None)


def test_version_upgrade():
    msg = MsgProtoGovUpgrade(ADDR_A, 1000, "RC-0.9.0")
    assert msg.to_sign_doc_obj() == {
        "type": "gov/msg_upgrade",
        "value": {
            "address": ADDR_A,
            "upgrade": {"Features": None, "Height": "1000", "OldUpgradeHeight": "0", "Version": "RC-0.9.0"},
        },
    }
    upgrade = b"\x08\xe8\x07" + b"\x12\x08RC-0.9.0"
    assert msg.encode() == b"\x0a\x14" + bytes.fromhex(ADDR_A) + b"\x12" + bytes([len(upgrade)]) + upgrade


def test_feature_upgrade():
    msg = MsgProtoGovUpgrade(ADDR_A, 1, "FEATURE", ["RewardDelegator:5000", "AppTransfer:6000"])
    assert msg.is_feature_upgrade
    assert msg.sign_doc_value()["upgrade"]["Features"] == ["RewardDelegator:5000", "AppTransfer:6000"]
    assert msg.sign_doc_value()["upgrade"]["Height"] == "1"


@pytest.mark.parametrize(
    "height,version,features",
    [
        (2, "FEATURE", ["A:10"]),
        (1, "FEATURE", []),
        (1, "FEATURE", ["A"]),
        (1, "FEATURE", ["A:0"]),
        (1, "FEATURE", ["A:-3"]),
        (1, "FEATURE", ["A:010"]),
        (0, "RC-1.0", []),
        (100, "RC-1.0", ["A:10"]),
        (-1, "RC-1.0", []),
    ],
)
def test_upgrade_rejects_inconsistent_shapes(height, version, features):
    with pytest.raises((InvalidFieldError, MissingFieldError)):
        MsgProtoGovUpgrade(ADDR_A, height, version, features)


def test_upgrade_requires_version():
    with pytest.raises(MissingFieldError):
        MsgProtoGovUpgrade(ADDR_A, 10, "")


@pytest.mark.parametrize(
    "kw",
    [
        {"height": 2**63},
        {"height": 10, "old_upgrade_height": 2**63},
        {"height": 10, "version": 5},
    ],
)
def test_upgrade_rejects_values_outside_the_wire_types(kw):
    args = {"from_address": ADDR_A, "version": "RC-1.0.0"}
    args.update(kw)
    with pytest.raises(InvalidFieldError):
        MsgProtoGovUpgrade(**args)


def test_upgrade_accepts_int64_max():
    msg = MsgProtoGovUpgrade(ADDR_A, 2**63 - 1, "RC-1.0.0")
    assert msg.sign_doc_value()["upgrade"]["Height"] == str(2**63 - 1)
    assert len(msg.encode()) > 0


def test_change_param_float_value_renders_like_json_stringify():
    msg = MsgProtoGovChangeParam(ADDR_A, "pos/DAOAllocation", 10.0)
    assert msg.value_bytes() == b"10"
