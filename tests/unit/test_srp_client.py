# [UNIT TEST] for SRP CLIENT (AuthenticationHelper) ============================================================================================

import pytest

from claris_auth.core.exceptions import SRPProtocolError, SRPStateError
from claris_auth.core.hashing import derive_key, hash_string, hex_hash
from claris_auth.core.srp_client import AuthenticationHelper, SRPState, get_multiplier
from claris_auth.core.srp_math import N, g, hex_to_int, int_to_padded_bytes, mod_pow, pad_hex


@pytest.fixture
def helper(golden):
    h = AuthenticationHelper(golden.POOL_NAME, small_a=golden.SMALL_A)
    h.init()
    return h


def test_multiplier(golden):
    assert pad_hex(get_multiplier()) == golden.K_HEX


def test_large_a_matches_golden(helper, golden):
    assert helper.state == SRPState.INITIALIZED
    assert helper.get_large_a() == golden.A_HEX


def test_intermediate_values_match_golden(helper, golden):
    server_b = hex_to_int(golden.B_HEX)
    u = helper.compute_u(server_b)
    x = helper.compute_x(golden.USER_ID_FOR_SRP, golden.PASSWORD, hex_to_int(golden.SALT_HEX))
    assert pad_hex(u) == golden.U_HEX
    assert pad_hex(x) == golden.X_HEX
    assert pad_hex(helper.compute_shared_secret(server_b, u, x)) == golden.S_HEX


def test_signing_key_matches_golden(helper, golden):
    key = helper.get_password_authentication_key(
        golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX
    )
    assert key.hex() == golden.SIGNING_KEY_HEX
    assert helper.state == SRPState.KEY_DERIVED


def test_client_and_simulated_server_agree_on_key(golden):
    # server side of the same exchange with a random client secret
    salt_hex = "5e1f00d2c3b4a59687"
    user_id, password = "service-user", "p@ss:word"

    client = AuthenticationHelper(golden.POOL_NAME)
    client.init()
    large_a = hex_to_int(client.get_large_a())

    k = get_multiplier()
    x = hex_to_int(hex_hash(pad_hex(hex_to_int(salt_hex)) + hash_string(f"{golden.POOL_NAME}{user_id}:{password}")))
    verifier = mod_pow(g, x, N)
    small_b = golden.SMALL_B
    server_b = (k * verifier + mod_pow(g, small_b, N)) % N
    u = hex_to_int(hex_hash(pad_hex(large_a) + pad_hex(server_b)))
    server_s = mod_pow(large_a * mod_pow(verifier, u, N) % N, small_b, N)
    server_key = derive_key(int_to_padded_bytes(server_s), int_to_padded_bytes(u))

    client_key = client.get_password_authentication_key(user_id, password, pad_hex(server_b), salt_hex)
    assert client_key == server_key


def test_wrong_password_gives_different_key(golden):
    keys = []
    for password in (golden.PASSWORD, golden.PASSWORD + "!"):
        h = AuthenticationHelper(golden.POOL_NAME, small_a=golden.SMALL_A)
        h.init()
        keys.append(h.get_password_authentication_key(golden.USER_ID_FOR_SRP, password, golden.B_HEX, golden.SALT_HEX))
    assert keys[0] != keys[1]


def test_fresh_secret_per_instance(golden):
    first = AuthenticationHelper(golden.POOL_NAME)
    second = AuthenticationHelper(golden.POOL_NAME)
    first.init()
    second.init()
    assert first.get_large_a() != second.get_large_a()


def test_methods_require_init(golden):
    h = AuthenticationHelper(golden.POOL_NAME)
    assert h.state == SRPState.UNINITIALIZED
    with pytest.raises(SRPStateError, match="init"):
        h.get_large_a()
    with pytest.raises(SRPStateError, match="init"):
        h.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX)


def test_instance_is_single_use(helper, golden):
    with pytest.raises(SRPStateError):
        helper.init()
    helper.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX)
    with pytest.raises(SRPStateError):
        helper.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX)


def test_secret_exponent_unusable_after_key_derived(helper, golden):
    helper.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX)
    other_b = hex_to_int(golden.B_HEX) + 1
    with pytest.raises(SRPStateError):
        helper.compute_u(other_b)
    with pytest.raises(SRPStateError):
        helper.compute_shared_secret(other_b, 1, 1)
    # A stays readable
    assert helper.get_large_a() == golden.A_HEX


@pytest.mark.parametrize("server_b", [0, N, 2 * N])
def test_rejects_b_congruent_to_zero(helper, golden, server_b):
    with pytest.raises(SRPProtocolError):
        helper.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, format(server_b, "x"), golden.SALT_HEX)


def test_rejects_zero_scrambling_parameter(helper, golden, monkeypatch):
    monkeypatch.setattr(helper, "compute_u", lambda server_b: 0)
    with pytest.raises(SRPProtocolError, match="u"):
        helper.get_password_authentication_key(golden.USER_ID_FOR_SRP, golden.PASSWORD, golden.B_HEX, golden.SALT_HEX)
    assert helper.state == SRPState.INITIALIZED


def test_pool_name_required():
    with pytest.raises(ValueError):
        AuthenticationHelper("")
