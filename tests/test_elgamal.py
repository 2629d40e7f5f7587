import pytest

from ipfe_ddh.elgamal import Commitment, ElGamalCiphertext, PKEClient
from ipfe_ddh.errors import (
    InvalidGroupElementError,
    KeypairIntegrityError,
    ModularInverseUndefinedError,
)
from ipfe_ddh.group import GroupParameters

from .conftest import ScriptedRandom


def test_keypair_consistency(demo_params):
    for _ in range(20):
        client = PKEClient(demo_params)
        assert 0 <= client.private_key < demo_params.p
        assert client.h == pow(demo_params.g, client.private_key, demo_params.p)
        client.check_keypair()


def test_key_drawn_from_shared_rng():
    params = GroupParameters.demo(rng=ScriptedRandom([5, 73 + 9]))
    assert PKEClient(params).h == 29
    # reduced mod p
    assert PKEClient(params).private_key == 9


def test_round_trip_own_key(demo_params):
    alice, bob = PKEClient(demo_params), PKEClient(demo_params)
    for m in range(1, demo_params.p):
        ct = alice.encrypt(m, alice.commit(), bob)
        assert bob.decrypt(ct) == m
        assert alice.decrypt(ct, bob.private_key) == m


def test_ciphertext_shape(demo_params):
    alice, bob = PKEClient(demo_params), PKEClient(demo_params)
    r = Commitment(7)
    ct = alice.encrypt(36, r, bob)
    assert isinstance(ct, ElGamalCiphertext)
    assert ct.c0 == pow(15, 7, 73)
    assert ct.c1 == (pow(bob.h, 7, 73) * 36) % 73


def test_wrong_key_gives_wrong_message(big_params):
    alice, bob = PKEClient(big_params), PKEClient(big_params)
    m = 123456789
    ct = alice.encrypt(m, alice.commit(), bob)
    assert alice.decrypt(ct) != m
    assert bob.decrypt(ct) == m


def test_commitments_do_not_repeat(big_params):
    client = PKEClient(big_params)
    draws = [client.commit().r for _ in range(500)]
    assert len(set(draws)) == len(draws)
    assert all(0 <= r < big_params.p for r in draws)


@pytest.mark.parametrize("msg", [-1, 73, 1000])
def test_encrypt_rejects_out_of_range_message(demo_params, msg):
    alice = PKEClient(demo_params)
    with pytest.raises(InvalidGroupElementError):
        alice.encrypt(msg, alice.commit(), alice)


def test_decrypt_rejects_out_of_range_ciphertext(demo_params):
    alice = PKEClient(demo_params)
    with pytest.raises(InvalidGroupElementError):
        alice.decrypt(ElGamalCiphertext(73, 1))
    with pytest.raises(InvalidGroupElementError):
        alice.decrypt(ElGamalCiphertext(1, -5))


def test_check_keypair_detects_corruption(demo_params):
    client = PKEClient(demo_params)
    client.h = (client.h * demo_params.g) % demo_params.p
    with pytest.raises(KeypairIntegrityError):
        client.check_keypair()


@pytest.mark.parametrize("key", [-3, 4])
def test_decrypt_zero_c0_has_no_inverse(demo_params, key):
    alice = PKEClient(demo_params)
    with pytest.raises(ModularInverseUndefinedError):
        alice.decrypt(ElGamalCiphertext(0, 5), key)


def test_decrypt_negative_key(demo_params):
    alice, bob = PKEClient(demo_params), PKEClient(demo_params)
    ct = alice.encrypt(36, Commitment(7), bob)
    # g^(-x) as a key inverts the usual shared secret
    assert alice.decrypt(ct, -bob.private_key) == (ct.c1 * pow(ct.c0, bob.private_key, 73)) % 73
