import numpy as np

from classic_cipher.cipher_math import cipher_math


class TestAlphabetUtilities:

    def test_shift_preserves_case(self):
        assert cipher_math.shift("A", 1) == "B"
        assert cipher_math.shift("z", 1) == "a"
        assert cipher_math.shift("Z", -1) == "Y"

    def test_shift_wraps_large_and_negative_amounts(self):
        assert cipher_math.shift("c", 52) == "c"
        assert cipher_math.shift("c", -29) == "z"

    def test_non_letters_pass_through(self):
        for ch in " 1!é-\n":
            assert cipher_math.shift(ch, 5) == ch

    def test_letter_index_uses_own_case(self):
        assert cipher_math.letter_index("A") == 0
        assert cipher_math.letter_index("a") == 0
        assert cipher_math.letter_index("z") == 25

    def test_is_alpha_string(self):
        assert cipher_math.is_alpha_string("Lemon")
        assert not cipher_math.is_alpha_string("")
        assert not cipher_math.is_alpha_string("AB1")
        assert not cipher_math.is_alpha_string("café")


class TestModularAlgebra:

    def test_mod_inverse(self):
        assert cipher_math.mod_inverse(9) == 3
        assert cipher_math.mod_inverse(1) == 1
        assert cipher_math.mod_inverse(-17) == 3  # -17 = 9 mod 26
        assert cipher_math.mod_inverse(13) is None
        assert cipher_math.mod_inverse(0) is None

    def test_determinant_is_normalised(self):
        assert cipher_math.determinant(cipher_math.to_matrix([3, 3, 2, 5])) == 9
        # 1*1 - 2*3 = -5 -> 21
        assert cipher_math.determinant(cipher_math.to_matrix([1, 2, 3, 1])) == 21

    def test_invertibility(self):
        assert cipher_math.is_invertible(cipher_math.to_matrix([3, 3, 2, 5]))
        assert not cipher_math.is_invertible(cipher_math.to_matrix([2, 4, 4, 8]))
        assert not cipher_math.is_invertible(cipher_math.to_matrix([2, 0, 0, 2]))

    def test_adjugate(self):
        adj = cipher_math.adjugate(cipher_math.to_matrix([3, 3, 2, 5]))
        assert adj.tolist() == [[5, 23], [24, 3]]

    def test_inverse_matrix(self):
        key = cipher_math.to_matrix([3, 3, 2, 5])
        inv = cipher_math.inverse_matrix(key)
        assert inv.tolist() == [[15, 17], [20, 9]]
        assert np.array_equal(np.mod(key @ inv, 26), np.eye(2, dtype=np.int64))

    def test_inverse_matrix_none_when_singular(self):
        assert cipher_math.inverse_matrix(cipher_math.to_matrix([2, 4, 4, 8])) is None

    def test_multiply_pairs_uses_row_vectors(self):
        key = cipher_math.to_matrix([3, 3, 2, 5])
        # (7, 4) . K = (29, 41) = (3, 15)
        assert cipher_math.multiply_pairs([7, 4, 11, 15], key) == [3, 15, 11, 4]
