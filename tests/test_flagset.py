"""
Tests for FlagSet construction, validation and value resolution.
"""

import pickle

import pytest
import bitwise_flags as bf


class TestConstruction:
    """Test the different ways of building a flag set."""

    def test_explicit_mapping(self):
        flags = bf.FlagSet({'read': 1, 'write': 2, 'delete': 4})
        assert flags.to_dict() == {'read': 1, 'write': 2, 'delete': 4}
        assert flags.names == ('read', 'write', 'delete')

    def test_auto(self):
        flags = bf.FlagSet.auto(['read', 'write', 'delete', 'admin'])
        assert flags.to_dict() == {'read': 1, 'write': 2, 'delete': 4, 'admin': 8}

    @pytest.mark.parametrize("count", [0, 1, 5, 20])
    def test_auto_assigns_ascending_powers(self, count):
        names = [f"flag{i}" for i in range(count)]
        flags = bf.FlagSet.auto(names)
        assert [flags[name] for name in names] == [1 << i for i in range(count)]

    def test_parse(self):
        flags = bf.FlagSet.parse('read=1,write=2,delete=4')
        assert flags == bf.FlagSet({'read': 1, 'write': 2, 'delete': 4})

    def test_parse_with_spaces(self):
        flags = bf.FlagSet.parse(' read = 1 , write = 2 ')
        assert flags.to_dict() == {'read': 1, 'write': 2}

    def test_parse_invalid_syntax(self):
        with pytest.raises(bf.InvalidFlagSyntax):
            bf.FlagSet.parse('invalid')

    def test_parse_invalid_value(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="Flag value must be a power of 2: 3"):
            bf.FlagSet.parse('read=1,write=3')

    def test_from_assoc(self):
        flags = bf.FlagSet.from_assoc({'read': None, 'write': 16, 'delete': None, 'admin': 64})
        assert flags.to_dict() == {'read': 1, 'write': 16, 'delete': 32, 'admin': 64}

    def test_from_assoc_validates_explicit_values(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="power of 2: 12"):
            bf.FlagSet.from_assoc({'read': None, 'write': 12})

    def test_from_shorthand(self):
        flags = bf.FlagSet.from_shorthand('bitwise:user,moderator,admin')
        assert flags.to_dict() == {'user': 1, 'moderator': 2, 'admin': 4}

    def test_from_shorthand_requires_prefix(self):
        with pytest.raises(bf.InvalidFlagDefinition):
            bf.FlagSet.from_shorthand('user,moderator')

    def test_from_definition_dispatch(self):
        expected = {'read': 1, 'write': 2}
        existing = bf.FlagSet(expected)
        assert bf.FlagSet.from_definition(existing) is existing
        assert bf.FlagSet.from_definition(expected).to_dict() == expected
        assert bf.FlagSet.from_definition('read=1,write=2').to_dict() == expected
        assert bf.FlagSet.from_definition('bitwise:read,write').to_dict() == expected
        assert bf.FlagSet.from_definition(['read', 'write']).to_dict() == expected

    def test_from_definition_rejects_other_types(self):
        with pytest.raises(bf.InvalidFlagType):
            bf.FlagSet.from_definition(42)

    def test_empty(self):
        flags = bf.FlagSet()
        assert len(flags) == 0
        assert flags.mask == 0


class TestValidation:
    """Test that invalid definitions fail eagerly."""

    def test_value_not_power_of_two(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="Flag value must be a power of 2: 3") as exc_info:
            bf.FlagSet({'read': 1, 'bad': 3})
        assert exc_info.value.name == 'bad'
        assert exc_info.value.value == 3

    def test_empty_name(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="Flag name must be a non-empty string."):
            bf.FlagSet({'': 1})

    def test_non_string_name(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="Flag name must be a non-empty string."):
            bf.FlagSet({0: 1})

    @pytest.mark.parametrize("value", [0, -1, -8])
    def test_non_positive_value(self, value):
        with pytest.raises(bf.InvalidFlagDefinition, match=f"Flag value must be a positive integer: {value}"):
            bf.FlagSet({'read': value})

    @pytest.mark.parametrize("value", ['1', 1.0, True, None])
    def test_non_integer_value(self, value):
        with pytest.raises(bf.InvalidFlagDefinition, match="positive integer"):
            bf.FlagSet({'read': value})

    def test_duplicate_values_are_allowed(self):
        flags = bf.FlagSet({'read': 1, 'view': 1})
        assert flags.view(1).names() == ['read', 'view']

    def test_definition_error_is_value_error(self):
        with pytest.raises(ValueError):
            bf.FlagSet({'read': 3})


class TestMappingBehavior:
    """Test FlagSet as a read-only ordered mapping."""

    def setup_method(self):
        self.flags = bf.FlagSet.auto(['read', 'write', 'delete', 'admin'])

    def test_lookup(self):
        assert self.flags['delete'] == 4
        assert 'admin' in self.flags
        assert 'owner' not in self.flags
        assert ['x'] not in self.flags

    def test_unknown_lookup(self):
        with pytest.raises(bf.UnknownFlag, match="Unknown flag: owner"):
            self.flags['owner']

    def test_unknown_lookup_is_key_error(self):
        assert self.flags.get('owner') is None
        with pytest.raises(KeyError):
            self.flags['owner']

    def test_iteration_order(self):
        assert list(self.flags) == ['read', 'write', 'delete', 'admin']
        assert list(self.flags.values()) == [1, 2, 4, 8]

    def test_mask(self):
        assert self.flags.mask == 15

    def test_flags(self):
        assert self.flags.flags() == [
            bf.Flag('read', 1), bf.Flag('write', 2), bf.Flag('delete', 4), bf.Flag('admin', 8),
        ]
        assert self.flags.flag('write') == bf.Flag('write', 2)

    def test_no_item_assignment(self):
        with pytest.raises(TypeError):
            self.flags['owner'] = 16

    def test_to_dict_is_a_copy(self):
        copy = self.flags.to_dict()
        copy['owner'] = 16
        assert 'owner' not in self.flags

    def test_equality_respects_order(self):
        assert self.flags == bf.FlagSet({'read': 1, 'write': 2, 'delete': 4, 'admin': 8})
        assert self.flags != bf.FlagSet({'write': 2, 'read': 1, 'delete': 4, 'admin': 8})
        assert hash(self.flags) == hash(bf.FlagSet.auto(['read', 'write', 'delete', 'admin']))

    def test_repr(self):
        assert repr(bf.FlagSet({'read': 1})) == "FlagSet({'read': 1})"


class TestResolve:
    """Test resolving any flag argument to a bitmask."""

    def setup_method(self):
        self.flags = bf.FlagSet.auto(['read', 'write', 'delete', 'admin'])

    def test_none(self):
        assert self.flags.resolve(None) == 0

    def test_int(self):
        assert self.flags.resolve(5) == 5

    def test_name(self):
        assert self.flags.resolve('delete') == 4

    def test_flag(self):
        assert self.flags.resolve(bf.Flag('admin', 8)) == 8

    def test_view(self):
        assert self.flags.resolve(self.flags.view(6)) == 6

    def test_list(self):
        assert self.flags.resolve(['read', 'write']) == 3
        assert self.flags.resolve(('read', bf.Flag('admin', 8))) == 9
        assert self.flags.resolve([]) == 0

    def test_unknown_name(self):
        with pytest.raises(bf.UnknownFlag) as exc_info:
            self.flags.resolve(['read', 'owner'])
        assert exc_info.value.name == 'owner'

    def test_invalid_types(self):
        with pytest.raises(bf.InvalidFlagType):
            self.flags.resolve(True)
        with pytest.raises(bf.InvalidFlagType):
            self.flags.resolve([1, 2])
        with pytest.raises(bf.InvalidFlagType):
            self.flags.resolve(1.5)


class TestNonMappingDefinition:
    """Test that the explicit constructor only takes mappings."""

    def test_list_of_names(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="Use FlagSet.auto"):
            bf.FlagSet(['read', 'write'])

    def test_string(self):
        with pytest.raises(bf.InvalidFlagDefinition, match="must be a mapping"):
            bf.FlagSet('read=1')

    def test_pickle_round_trip(self):
        flags = bf.FlagSet.auto(['read', 'write'])
        assert pickle.loads(pickle.dumps(flags)) == flags
