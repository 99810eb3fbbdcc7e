#!/usr/bin/env python3
"""
Unit tests for the nearsyn interface extractor.

Run with: python3 -m pytest nearsyn/test_nearsyn.py
   or: cd .. && python3 nearsyn/test_nearsyn.py
"""

import sys
import os
# Add parent directory to path for proper imports - MUST be before other imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from nearsyn import NearSynGenerator, main
from nearsyn.errors import UnsupportedType, DuplicateIncompatibleDecl, MalformedDocBlock
from nearsyn.lexer import Lexer, TokenType
from nearsyn.parser import Parser, StructItem, EnumItem, ImplItem, TraitItem
from nearsyn.type_system import (
    TypeResolver,
    TypeRegistry,
    Primitive,
    Alias,
    Container,
    ContainerKind,
    RUST_TO_TS_MAP,
    NEAR_SDK_TYPES,
    CONTAINER_TYPES,
    TRANSPARENT_TYPES,
)
from nearsyn.model import (
    DocBlock,
    DocExtractor,
    MethodKind,
    TypeAliasDecl,
    RecordDecl,
    EnumDecl,
    InterfaceDecl,
    normalize_doc_lines,
)
from nearsyn.codegen import GeneratorConfig, GeneratorDiagnostics, TypeConverter


def parse(source):
    tokens = Lexer(source).tokenize()
    return Parser(tokens, source).parse()


def generator_for(*sources, **config):
    """Create a generator with `sources` queued and a fixed (empty) timestamp."""
    generator = NearSynGenerator(GeneratorConfig(**config))
    for index, source in enumerate(sources):
        generator.add_source(source, f'src{index}.rs')
    return generator


CONTRACT_SOURCE = '''//! Sample contract.
//!
//! Keeps a configuration record.

use near_sdk::{near_bindgen, AccountId, Balance};

#[derive(Serialize, Deserialize)]
#[serde(crate = "near_sdk::serde")]
pub struct Config {
    /// Owner account.
    pub owner: AccountId,
    pub limit: Option<u64>,
}

#[near_bindgen]
#[derive(BorshDeserialize, BorshSerialize)]
pub struct Contract {
    config: Config,
}

#[near_bindgen]
impl Contract {
    /// Creates the contract.
    #[init]
    pub fn new(owner: AccountId) -> Self {
        Self { config: Config { owner, limit: None } }
    }

    /// Returns the config.
    ///
    /// The limit is optional.
    pub fn get_config(&self) -> Config {
        self.config.clone()
    }

    pub fn set_limit(&mut self, limit: u64) {
        self.config.limit = Some(limit);
    }

    #[payable]
    pub fn donate(&mut self) {}

    pub fn transfer(&self, receiver: AccountId, deposit: Balance) {}

    #[private]
    pub fn on_transfer(&mut self) {}

    fn helper(&self) -> u64 {
        42
    }
}
'''


# =============================================================================
# LEXER AND PARSER
# =============================================================================

class TestLexer(unittest.TestCase):
    """Test Rust tokenization."""

    def test_nested_generics_close_one_level_per_token(self):
        tokens = Lexer('Vec<Vec<u8>>').tokenize()
        types = [t.type for t in tokens]
        self.assertEqual(types.count(TokenType.GT), 2)
        self.assertEqual(types[-1], TokenType.EOF)

    def test_raw_identifier_drops_prefix(self):
        tokens = Lexer('r#type').tokenize()
        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[0].value, 'type')

    def test_comments_are_skipped(self):
        tokens = Lexer('/// doc\n// note\n/* block */ struct').tokenize()
        self.assertEqual(tokens[0].type, TokenType.STRUCT)
        self.assertEqual(tokens[0].line, 3)

    def test_lifetime(self):
        tokens = Lexer("&'a str").tokenize()
        self.assertEqual(tokens[1].type, TokenType.LIFETIME)


class TestParser(unittest.TestCase):
    """Test declaration parsing."""

    def test_named_struct_with_derives(self):
        unit = parse(CONTRACT_SOURCE)
        config = unit.items[0]
        self.assertIsInstance(config, StructItem)
        self.assertEqual(config.name, 'Config')
        self.assertEqual(config.style, 'named')
        self.assertEqual([f.name for f in config.fields], ['owner', 'limit'])
        self.assertTrue(config.is_serde)

    def test_borsh_derive_is_not_serde(self):
        unit = parse(CONTRACT_SOURCE)
        contract = unit.items[1]
        self.assertEqual(contract.name, 'Contract')
        self.assertFalse(contract.is_serde)
        self.assertTrue(contract.has_attribute('near_bindgen'))

    def test_impl_methods_and_receivers(self):
        unit = parse(CONTRACT_SOURCE)
        impl = unit.items[2]
        self.assertIsInstance(impl, ImplItem)
        self.assertEqual(impl.name, 'Contract')
        self.assertIsNone(impl.trait_name)
        names = [fn.name for fn in impl.methods]
        self.assertEqual(names, ['new', 'get_config', 'set_limit', 'donate',
                                 'transfer', 'on_transfer', 'helper'])

        new, get_config, set_limit = impl.methods[:3]
        self.assertIsNone(new.receiver)
        self.assertTrue(new.has_attribute('init'))
        self.assertFalse(get_config.receiver.is_mutable)
        self.assertTrue(set_limit.receiver.is_mutable)
        self.assertEqual(set_limit.parameters[0].name, 'limit')
        self.assertFalse(impl.methods[-1].is_public)

    def test_trait_impl_and_trait(self):
        source = '''
        pub trait Greeter: Clone {
            fn greet(&self) -> String;
        }

        impl Greeter for Contract {
            fn greet(&self) -> String { String::new() }
        }
        '''
        unit = parse(source)
        trait, impl = unit.items
        self.assertIsInstance(trait, TraitItem)
        self.assertEqual([m.name for m in trait.methods], ['greet'])
        self.assertEqual(impl.trait_name, 'Greeter')
        self.assertEqual(impl.name, 'Contract')

    def test_enum_payloads(self):
        source = '''
        pub enum Status {
            Active = 1,
            Failed(String),
            Moved { to: AccountId },
        }
        '''
        enum = parse(source).items[0]
        self.assertIsInstance(enum, EnumItem)
        self.assertEqual([(v.name, v.payload) for v in enum.variants],
                         [('Active', ''), ('Failed', 'tuple'), ('Moved', 'struct')])

    def test_unknown_items_are_skipped(self):
        source = '''
        use std::collections::HashMap;
        const LIMIT: u64 = 10;
        macro_rules! noop { () => {} }
        pub type Id = u64;
        '''
        items = parse(source).items
        self.assertEqual([item.name for item in items], ['Id'])

    def test_doc_span_stops_at_previous_item(self):
        source = 'pub type A = u64;\n/// B doc\npub type B = u64;\n'
        a, b = parse(source).items
        self.assertEqual(a.doc_span, [])
        self.assertEqual(b.doc_span, ['/// B doc'])

    def test_restricted_visibility_is_not_public(self):
        source = '''
        impl C {
            pub fn open(&self) {}
            pub(crate) fn crate_only(&self) {}
            pub(in crate::a) fn scoped(&self) {}
        }
        '''
        impl = parse(source).items[0]
        self.assertEqual([(fn.name, fn.is_public) for fn in impl.methods],
                         [('open', True), ('crate_only', False), ('scoped', False)])

    def test_syntax_error_reports_line(self):
        with self.assertRaises(SyntaxError) as ctx:
            parse('pub struct {\n}')
        self.assertIn('line 1', str(ctx.exception))


# =============================================================================
# TYPE RESOLUTION
# =============================================================================

class TestTypeResolver(unittest.TestCase):
    """Test Rust type to TypeRef resolution."""

    def setUp(self):
        self.resolver = TypeResolver()
        self.converter = TypeConverter(GeneratorConfig())

    def resolve(self, type_text):
        target = parse(f'type T = {type_text};').items[0].target
        return self.resolver.resolve(target, 'T')

    def ts(self, type_text):
        return self.converter.ts_type(self.resolve(type_text))

    def test_primitives(self):
        self.assertEqual(self.resolve('u64'), Primitive('number'))
        self.assertEqual(self.resolve('String'), Primitive('string'))
        self.assertEqual(self.resolve('bool'), Primitive('boolean'))
        self.assertEqual(self.resolve('()'), Primitive('void'))

    def test_every_primitive_resolves(self):
        for name, ts_name in RUST_TO_TS_MAP.items():
            with self.subTest(name=name):
                self.assertEqual(self.resolve(name), Primitive(ts_name))
        for name in ('usize', 'f32', 'i8', 'isize'):
            self.assertEqual(self.ts(name), 'number')
        self.assertEqual(self.ts('char'), 'string')

    def test_sdk_wrappers_resolve_by_name(self):
        for name in NEAR_SDK_TYPES:
            with self.subTest(name=name):
                self.assertEqual(self.resolve(name), Alias(name))
                self.assertEqual(self.ts(name), name)
        self.assertEqual(set(NEAR_SDK_TYPES), {
            'U64', 'I64', 'U128', 'I128', 'Base64VecU8', 'Balance', 'AccountId', 'ValidAccountId'})
        self.assertEqual(self.resolve('near_sdk::json_types::U128'), Alias('U128'))

    def test_every_container_shape(self):
        for name, (kind, arity) in CONTAINER_TYPES.items():
            with self.subTest(name=name):
                args = ', '.join(['u64'] * arity)
                self.assertEqual(self.resolve(f'{name}<{args}>'),
                                 Container(kind, (Primitive('number'),) * arity))
                with self.assertRaises(UnsupportedType):
                    self.resolve(f'{name}<{args}, u64>')
        for name in TRANSPARENT_TYPES:
            with self.subTest(name=name):
                self.assertEqual(self.resolve(f'{name}<AccountId>'), Alias('AccountId'))

    def test_containers(self):
        self.assertEqual(self.resolve('Option<u64>'),
                         Container(ContainerKind.OPTIONAL, (Primitive('number'),)))
        self.assertEqual(self.ts('Vec<String>'), 'string[]')
        self.assertEqual(self.ts('HashSet<AccountId>'), 'AccountId[]')
        self.assertEqual(self.ts('HashMap<String, U128>'), 'Record<string, U128>')
        self.assertEqual(self.ts('(u64, String)'), '[number, string]')
        self.assertEqual(self.ts('Box<u32>'), 'number')

    def test_precedence_parentheses(self):
        self.assertEqual(self.ts('Option<Vec<u64>>'), 'number[]|null')
        self.assertEqual(self.ts('Vec<Option<u64>>'), '(number|null)[]')
        self.assertEqual(self.ts('Vec<Vec<u8>>'), 'number[][]')
        self.assertEqual(self.ts('Option<Option<u8>>'), 'number|null|null')

    def test_unknown_names_pass_through(self):
        self.assertEqual(self.resolve('TokenMetadata'), Alias('TokenMetadata'))

    def test_128_bit_integers_are_rejected(self):
        with self.assertRaises(UnsupportedType) as ctx:
            self.resolve('u128')
        self.assertIn('U128', str(ctx.exception))

    def test_container_arity(self):
        with self.assertRaises(UnsupportedType):
            self.resolve('Option<u64, u64>')
        with self.assertRaises(UnsupportedType):
            self.resolve('HashMap<String>')
        with self.assertRaises(UnsupportedType):
            self.resolve('Vec')

    def test_generic_user_types_are_rejected(self):
        with self.assertRaises(UnsupportedType):
            self.resolve('Wrapper<u64>')

    def test_references_and_fn_pointers_are_rejected(self):
        with self.assertRaises(UnsupportedType):
            self.resolve('&str')
        with self.assertRaises(UnsupportedType):
            self.resolve('fn(u64) -> u64')

    def test_extra_types(self):
        resolver = TypeResolver({'Gas': ('number', [])})
        target = parse('type T = Gas;').items[0].target
        self.assertEqual(resolver.resolve(target), Alias('Gas'))


class TestTypeRegistry(unittest.TestCase):
    """Test declaration bookkeeping."""

    def test_interfaces_merge(self):
        registry = TypeRegistry()
        self.assertTrue(registry.declare('C', 'interface'))
        self.assertFalse(registry.declare('C', 'interface'))

    def test_incompatible_duplicate(self):
        registry = TypeRegistry()
        registry.declare('A', 'alias')
        with self.assertRaises(DuplicateIncompatibleDecl):
            registry.declare('A', 'record')
        with self.assertRaises(DuplicateIncompatibleDecl):
            registry.declare('A', 'alias')

    def test_unresolved_excludes_declared_and_catalog(self):
        registry = TypeRegistry()
        registry.record_references(
            Container(ContainerKind.MAP, (Alias('AccountId'), Alias('Later'))), 'first')
        registry.record_references(Alias('Missing'), 'second')
        registry.declare('Later', 'record')
        self.assertEqual(registry.unresolved(), [('Missing', 'second')])


# =============================================================================
# DOC EXTRACTION
# =============================================================================

class TestDocExtractor(unittest.TestCase):
    """Test doc comment extraction and normalization."""

    def setUp(self):
        self.diagnostics = GeneratorDiagnostics()
        self.extractor = DocExtractor(self.diagnostics)

    def test_outer_doc_lines(self):
        doc = self.extractor.extract(['/// Hello', '///   world  '])
        self.assertEqual(doc.lines, ('Hello', 'world'))

    def test_blank_line_ends_the_run(self):
        doc = self.extractor.extract(['/// Detached', '', '/// Attached'])
        self.assertEqual(doc.lines, ('Attached',))

    def test_code_line_ends_the_run(self):
        doc = self.extractor.extract(['/// Other', 'let x = 1;', '/// Mine'])
        self.assertEqual(doc.lines, ('Mine',))

    def test_attributes_and_comments_keep_the_run(self):
        span = ['/// Doc', '// plain comment', '#[derive(', '    Serialize,', ')]']
        self.assertEqual(self.extractor.extract(span).lines, ('Doc',))

    def test_no_doc(self):
        self.assertTrue(self.extractor.extract([]).is_empty)
        self.assertTrue(self.extractor.extract(['// just a comment']).is_empty)

    def test_block_doc(self):
        doc = self.extractor.extract(['/**', ' * Block doc', ' */'])
        self.assertEqual(doc.lines, ('Block doc',))

    def test_indented_fence_keeps_indentation(self):
        span = [
            '/// - Example:',
            '///   ```rust',
            '///   let x = 1;',
            '///   ```',
        ]
        doc = self.extractor.extract(span)
        self.assertEqual(doc.lines, ('- Example:', '  ```rust', '  let x = 1;', '  ```'))
        self.assertEqual(self.diagnostics.count, 0)
        self.assertEqual(DocBlock(('Intro', '  ```', 'code', '  ```')).summary(), 'Intro')

    def test_fenced_code_keeps_indentation(self):
        span = [
            '/// Example:',
            '/// ```',
            '///     let x = 1;',
            '/// ```',
        ]
        doc = self.extractor.extract(span)
        self.assertEqual(doc.lines, ('Example:', '```', '    let x = 1;', '```'))
        self.assertEqual(self.diagnostics.count, 0)

    def test_unclosed_fence_is_recovered(self):
        doc = self.extractor.extract(['/// ```rust', '/// code'], 'broken', 'lib.rs', 7)
        self.assertEqual(doc.lines, ('```rust', 'code'))
        self.assertEqual(self.diagnostics.codes(), ['W001'])
        self.assertEqual(self.diagnostics.warnings[0].line, 7)
        self.assertEqual(self.diagnostics.get_summary(), 'nearsyn warnings: 1 doc comment')

    def test_nested_info_fence_is_malformed(self):
        with self.assertRaises(MalformedDocBlock):
            normalize_doc_lines([' ```', ' ```rust', ' ```'])

    def test_inner_doc(self):
        doc = self.extractor.extract_inner(['//! Crate doc', '//! more', '', 'use x;'])
        self.assertEqual(doc.lines, ('Crate doc', 'more'))

    def test_summary(self):
        doc = DocBlock(('First line', 'continues |x|', '', 'Second paragraph'))
        self.assertEqual(doc.summary(), 'First line continues \\|x\\|')
        self.assertEqual(DocBlock(('Intro', '```', 'code', '```')).summary(), 'Intro')


# =============================================================================
# MODEL BUILDING AND CLASSIFICATION
# =============================================================================

class TestModelBuilder(unittest.TestCase):
    """Test folding declarations into the InterfaceModel."""

    def test_contract_model(self):
        generator = generator_for(CONTRACT_SOURCE)
        model = generator.build_model()

        self.assertEqual(model.contract_name, 'Contract')
        self.assertEqual([item.name for item in model.items], ['Config', 'Contract'])
        self.assertEqual(model.doc.lines, ('Sample contract.', '', 'Keeps a configuration record.'))
        self.assertEqual(generator.diagnostics.count, 0)

        config = model.get('Config')
        self.assertIsInstance(config, RecordDecl)
        self.assertEqual(config.fields[0].doc.lines, ('Owner account.',))
        self.assertEqual(config.fields[1].type_ref,
                         Container(ContainerKind.OPTIONAL, (Primitive('number'),)))

        contract = model.get('Contract')
        self.assertIsInstance(contract, InterfaceDecl)
        self.assertEqual(contract.method_names,
                         ('new', 'get_config', 'set_limit', 'donate', 'transfer'))
        self.assertEqual(contract.method('get_config').doc.lines,
                         ('Returns the config.', '', 'The limit is optional.'))

    def test_classification(self):
        contract = generator_for(CONTRACT_SOURCE).build_model().get('Contract')

        new = contract.method('new')
        self.assertEqual(new.kind, MethodKind.CONSTRUCTOR)
        self.assertEqual(new.returns, Alias('Contract'))
        self.assertFalse(new.accepts_gas)

        get_config = contract.method('get_config')
        self.assertEqual(get_config.kind, MethodKind.VIEW)
        self.assertEqual(get_config.returns, Alias('Config'))

        set_limit = contract.method('set_limit')
        self.assertEqual(set_limit.kind, MethodKind.CALL)
        self.assertTrue(set_limit.accepts_gas)
        self.assertFalse(set_limit.accepts_deposit)
        self.assertIsNone(set_limit.returns)

        donate = contract.method('donate')
        self.assertEqual(donate.kind, MethodKind.CALL)
        self.assertTrue(donate.accepts_deposit)
        self.assertEqual(donate.badge, '&#x24C3;')

        # Amount-typed parameters make a call even with a shared receiver
        transfer = contract.method('transfer')
        self.assertEqual(transfer.kind, MethodKind.CALL)
        self.assertTrue(transfer.accepts_deposit)

    def test_view_and_change_lists(self):
        model = generator_for(CONTRACT_SOURCE).build_model()
        self.assertEqual(model.view_methods, ('get_config',))
        self.assertEqual(model.change_methods, ('set_limit', 'donate', 'transfer'))

    def test_self_parameter_resolves_to_impl_type(self):
        source = '''
        #[near_bindgen]
        impl Counter {
            pub fn merge(&self, other: Self) -> Vec<Self> { vec![] }
        }
        '''
        method = generator_for(source).build_model().get('Counter').method('merge')
        self.assertEqual(method.params[0].type_ref, Alias('Counter'))
        self.assertEqual(method.returns, Container(ContainerKind.SEQUENCE, (Alias('Counter'),)))

    def test_impl_without_bindgen_is_ignored(self):
        source = '''
        impl Contract {
            pub fn hidden(&self) {}
        }
        '''
        model = generator_for(source).build_model()
        self.assertEqual(model.items, ())
        self.assertEqual(model.contract_name, '')

    def test_merge_last_fragment_wins(self):
        source = '''
        #[near_bindgen]
        impl C {
            pub fn m1(&self) -> u64 { 1 }
            pub fn m0(&self) {}
        }

        #[near_bindgen]
        impl C {
            pub fn m1(&mut self) -> u64 { 2 }
        }
        '''
        interface = generator_for(source).build_model().get('C')
        self.assertEqual(interface.method_names, ('m1', 'm0'))
        self.assertEqual(interface.method('m1').kind, MethodKind.CALL)

    def test_merge_across_files(self):
        first = '#[near_bindgen]\nimpl C {\n    pub fn a(&self) {}\n}\n'
        second = '#[near_bindgen]\nimpl C {\n    pub fn b(&mut self) {}\n}\n'
        model = generator_for(first, second).build_model()
        self.assertEqual(model.get('C').method_names, ('a', 'b'))

    def test_trait_impl_extends(self):
        source = '''
        #[near_bindgen]
        impl C {
            pub fn m1(&self) {}
        }

        #[near_bindgen]
        impl I for C {
            fn t1(&self) {}
        }
        '''
        model = generator_for(source).build_model()
        c = model.get('C')
        self.assertEqual(c.extends, ('I',))
        self.assertEqual(c.method_names, ('m1',))
        self.assertTrue(model.get('I').is_trait)
        self.assertEqual(model.get('I').method_names, ('t1',))

    def test_extends_is_idempotent(self):
        source = '''
        #[near_bindgen]
        impl I for C {
            fn t1(&self) {}
        }

        #[near_bindgen]
        impl I for C {
            fn t2(&self) {}
        }
        '''
        model = generator_for(source).build_model()
        self.assertEqual(model.get('C').extends, ('I',))
        self.assertEqual(model.get('I').method_names, ('t1', 't2'))
        self.assertEqual(model.contract_name, 'C')

    def test_trait_docs_are_forwarded_from_later_files(self):
        impl_source = '''
        #[near_bindgen]
        impl Greeter for C {
            fn greet(&self) -> String { String::new() }
        }
        '''
        trait_source = '''
        /// Greets people.
        pub trait Greeter {
            /// Returns a greeting.
            fn greet(&self) -> String;
        }
        '''
        model = generator_for(impl_source, trait_source).build_model()
        greeter = model.get('Greeter')
        self.assertEqual(greeter.doc.lines, ('Greets people.',))
        self.assertEqual(greeter.method('greet').doc.lines, ('Returns a greeting.',))

    def test_restricted_visibility_is_not_exported(self):
        source = '''
        #[near_bindgen]
        impl C {
            pub(crate) fn helper(&self) -> u32 { 1 }
            pub(super) fn parent_only(&self) {}
            pub(in crate::internal) fn scoped(&mut self) {}
            pub fn get(&self) -> u32 { 2 }
        }
        '''
        generator = generator_for(source)
        model = generator.build_model()
        self.assertEqual(model.get('C').method_names, ('get',))
        self.assertEqual(model.view_methods, ('get',))
        self.assertEqual(model.change_methods, ())
        self.assertNotIn('helper', generator.generate_ts(model))

    def test_private_methods_are_not_exported(self):
        source = '''
        #[near_bindgen]
        impl Token for C {
            #[private]
            fn resolve(&mut self) {}
            fn total(&self) -> U128 { U128(0) }
        }
        '''
        model = generator_for(source).build_model()
        self.assertEqual(model.get('Token').method_names, ('total',))

    def test_custom_bindgen_attribute(self):
        source = '''
        #[my_bindgen]
        impl C {
            pub fn f(&self) {}
        }
        '''
        model = generator_for(source, bindgen_attribute='my_bindgen').build_model()
        self.assertEqual(model.get('C').method_names, ('f',))

    def test_duplicate_declarations(self):
        source = '''
        pub type A = u64;

        #[derive(Serialize)]
        pub struct A {
            x: u64,
        }
        '''
        with self.assertRaises(DuplicateIncompatibleDecl):
            generator_for(source).build_model()

        with self.assertRaises(DuplicateIncompatibleDecl):
            generator_for('pub type A = u64;\npub type A = u32;\n').build_model()

    def test_test_modules_are_skipped(self):
        source = '''
        #[cfg(test)]
        mod tests {
            #[derive(Serialize)]
            pub struct Hidden {
                x: u64,
            }
        }

        mod inner {
            pub type Visible = u64;
        }
        '''
        model = generator_for(source).build_model()
        self.assertEqual([item.name for item in model.items], ['Visible'])

    def test_tuple_and_unit_structs_become_aliases(self):
        source = '''
        #[derive(Serialize, Deserialize)]
        pub struct Wrapper(pub U128);

        #[derive(Serialize, Deserialize)]
        pub struct Pair(u64, String);

        #[derive(Serialize, Deserialize)]
        pub struct Marker;
        '''
        model = generator_for(source).build_model()
        wrapper, pair, marker = model.items
        self.assertIsInstance(wrapper, TypeAliasDecl)
        self.assertEqual(wrapper.target, Alias('U128'))
        self.assertEqual(pair.target,
                         Container(ContainerKind.TUPLE, (Primitive('number'), Primitive('string'))))
        self.assertEqual(marker.target, Primitive('null'))

    def test_non_serde_types_are_skipped(self):
        source = '''
        pub struct Internal {
            x: u64,
        }

        pub enum Mode {
            A,
        }
        '''
        self.assertEqual(generator_for(source).build_model().items, ())

    def test_enum_payloads_are_dropped_with_warning(self):
        source = '''
        #[derive(Serialize, Deserialize)]
        pub enum Status {
            /// Still running.
            Active,
            Failed(String),
        }
        '''
        generator = generator_for(source)
        status = generator.build_model().get('Status')
        self.assertIsInstance(status, EnumDecl)
        self.assertEqual([v.name for v in status.variants], ['Active', 'Failed'])
        self.assertEqual(status.variants[0].doc.lines, ('Still running.',))
        self.assertEqual(generator.diagnostics.codes(), ['W002'])

    def test_unresolved_types_are_reported(self):
        source = '''
        #[near_bindgen]
        impl C {
            pub fn f(&self) -> Unknown { todo!() }
            pub fn g(&self, later: Later) {}
        }

        #[derive(Serialize)]
        pub struct Later {
            x: u64,
        }
        '''
        generator = generator_for(source)
        generator.build_model()
        self.assertEqual(generator.diagnostics.codes(), ['I001'])
        self.assertIn('Unknown', generator.diagnostics.infos[0].message)

    def test_unnamed_self_type_is_skipped(self):
        source = '''
        #[near_bindgen]
        impl (u64, u64) {
            pub fn f(&self) {}
        }
        '''
        generator = generator_for(source)
        self.assertEqual(generator.build_model().items, ())
        self.assertEqual(generator.diagnostics.codes(), ['W003'])

    def test_unsupported_types_abort(self):
        source = '''
        #[near_bindgen]
        impl C {
            pub fn f(&self, amount: u128) {}
        }
        '''
        with self.assertRaises(UnsupportedType) as ctx:
            generator_for(source).build_model()
        self.assertIn('C::f', str(ctx.exception))

    def test_generic_declarations_are_rejected(self):
        source = '''
        #[derive(Serialize)]
        pub struct Page<T> {
            items: Vec<T>,
        }
        '''
        with self.assertRaises(UnsupportedType):
            generator_for(source).build_model()


# =============================================================================
# RENDERING
# =============================================================================

class TestTsRenderer(unittest.TestCase):
    """Test TypeScript bindings output."""

    def test_alias_docs(self):
        source = 'pub type A = u64;\n\n/// Doc-comment for B\npub type B = u64;\n'
        output = generator_for(source).generate_ts()
        self.assertIn('/**\n */\nexport type A = number;\n', output)
        self.assertIn('/**\n * Doc-comment for B\n */\nexport type B = number;\n', output)

    def test_header_and_prelude(self):
        lines = generator_for(CONTRACT_SOURCE).generate_ts().splitlines()
        self.assertEqual(lines[0], '// TypeScript bindings generated with nearsyn v0.1.0')
        self.assertEqual(lines[2], '// Exports common NEAR Rust SDK types')
        self.assertIn('export type U128 = string;', lines)
        self.assertIn('export type AccountId = string;', lines)

    def test_timestamp_and_repository(self):
        output = generator_for('', now='2021-01-01', repository='https://example.org/repo').generate_ts()
        self.assertTrue(output.startswith(
            '// TypeScript bindings generated with nearsyn v0.1.0 https://example.org/repo on 2021-01-01\n'))

    def test_contract_bindings(self):
        output = generator_for(CONTRACT_SOURCE).generate_ts()
        self.assertIn('export type Config = {\n    /**\n     * Owner account.\n     */\n'
                      '    owner: AccountId;\n', output)
        self.assertIn('    limit: number|null;\n', output)
        self.assertIn('export interface Contract {\n', output)
        self.assertIn('    new: { owner: AccountId };\n', output)
        self.assertIn('    get_config(): Promise<Config>;\n', output)
        self.assertIn('    set_limit(args: { limit: number }, gas?: any): Promise<void>;\n', output)
        self.assertIn('    donate(gas?: any, amount?: any): Promise<void>;\n', output)
        self.assertIn('    transfer(args: { receiver: AccountId, deposit: Balance }, '
                      'gas?: any, amount?: any): Promise<void>;\n', output)
        self.assertTrue(output.endswith(
            'export const ContractMethods = {\n'
            '    viewMethods: [\n'
            '        "get_config",\n'
            '    ],\n'
            '    changeMethods: [\n'
            '        "set_limit",\n'
            '        "donate",\n'
            '        "transfer",\n'
            '    ],\n'
            '};\n'))

    def test_extends_only_interface(self):
        source = '''
        #[near_bindgen]
        impl I for C {
            fn t1(&self) {}
        }
        '''
        output = generator_for(source).generate_ts()
        self.assertIn('export interface I {\n', output)
        self.assertNotIn('export interface C {', output)
        self.assertIn('export interface C extends I {}\n', output)

    def test_enum(self):
        source = '''
        #[derive(Serialize, Deserialize)]
        pub enum Status {
            Active,
            Done,
        }
        '''
        output = generator_for(source).generate_ts()
        self.assertIn('export enum Status {\n    /**\n     */\n    Active,\n\n', output)

    def test_constructor_without_arguments(self):
        source = '''
        #[near_bindgen]
        impl C {
            #[init]
            pub fn new() -> Self { Self {} }
        }
        '''
        output = generator_for(source).generate_ts()
        self.assertIn('    new: {};\n', output)

    def test_extra_types_in_prelude(self):
        source = 'pub type Fee = Gas;\n'
        generator = generator_for(source, extra_types={'Gas': ('number', ['Gas units.'])})
        output = generator.generate_ts()
        self.assertIn('/**\n * Gas units.\n */\nexport type Gas = number;\n', output)
        self.assertEqual(generator.diagnostics.count, 0)

    def test_output_is_deterministic(self):
        generator = generator_for(CONTRACT_SOURCE)
        model = generator.build_model()
        self.assertEqual(generator.generate_ts(model), generator.generate_ts(model))
        self.assertEqual(generator.generate_md(model), generator.generate_md(model))
        self.assertEqual(generator.generate_ts(), generator_for(CONTRACT_SOURCE).generate_ts())
        self.assertEqual(generator.generate_md(), generator_for(CONTRACT_SOURCE).generate_md())

    def test_comment_terminator_in_doc_is_escaped(self):
        source = '/// glob a*/b\npub type A = u32;\n'
        output = generator_for(source).generate_ts()
        self.assertIn('/**\n * glob a*\\/b\n */\nexport type A = number;\n', output)
        self.assertNotIn('a*/b', output)

    def test_markdown_keeps_doc_text_verbatim(self):
        source = '/// glob a*/b\npub type A = u32;\n#[near_bindgen]\nimpl C {\n    /// glob a*/b\n    pub fn f(&self) {}\n}\n'
        output = generator_for(source).generate_md()
        self.assertIn('\nglob a*/b\n', output)


class TestDocRenderer(unittest.TestCase):
    """Test Markdown documentation output."""

    def setUp(self):
        self.output = generator_for(CONTRACT_SOURCE).generate_md()
        self.lines = self.output.splitlines()

    def test_header_and_crate_doc(self):
        self.assertEqual(self.lines[:6], [
            '<!-- AUTOGENERATED doc, do not modify! -->',
            '# Contract',
            '',
            'Sample contract.',
            '',
            'Keeps a configuration record.',
        ])

    def test_method_table(self):
        self.assertIn('## Methods for Contract', self.lines)
        self.assertIn('| Method | Description | Return |', self.lines)
        self.assertIn('| :rocket: `new` (_constructor_) | Creates the contract. | `Contract` |', self.lines)
        self.assertIn('| :eyeglasses: `get_config` | Returns the config. | `Config` |', self.lines)
        self.assertIn('| :writing_hand: `set_limit` |  | `void` |', self.lines)
        self.assertIn('| &#x24C3; `donate` |  | `void` |', self.lines)

    def test_method_details(self):
        self.assertIn(
            '### :rocket: `new` (*constructor*)\n\n'
            '```typescript\n'
            'new: { owner: AccountId };\n'
            '```\n\n'
            'Creates the contract.\n',
            self.output)
        self.assertIn(
            '### :eyeglasses: `get_config`\n\n'
            '```typescript\n'
            'get_config(): Promise<Config>;\n'
            '```\n\n'
            'Returns the config.\n\n'
            'The limit is optional.\n',
            self.output)

    def test_trait_heading(self):
        source = '''
        #[near_bindgen]
        impl I for C {
            fn t1(&self) -> Option<u64> { None }
        }
        '''
        lines = generator_for(source).generate_md().splitlines()
        self.assertIn('## Methods for `I` interface', lines)
        self.assertIn('## Methods for C', lines)
        self.assertIn('Implements `I`.', lines)
        self.assertIn('| :eyeglasses: `t1` |  | `number\\|null` |', lines)

    def test_footer(self):
        self.assertIn('References', self.lines)
        self.assertEqual(self.lines[-1], '*This documentation was generated with* **nearsyn v0.1.0**')

    def test_footer_with_timestamp(self):
        output = generator_for('', now='2021-01-01').generate_md()
        self.assertTrue(output.endswith('**nearsyn v0.1.0** *on 2021-01-01*\n'))


# =============================================================================
# CONFIGURATION AND COMMAND LINE
# =============================================================================

class TestGeneratorConfig(unittest.TestCase):
    """Test configuration loading."""

    def test_load_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'nearsyn.json')
            with open(path, 'w') as f:
                json.dump({
                    'bindgen_attribute': 'near',
                    'repository': 'https://example.org/repo',
                    'extra_types': {
                        'Gas': 'number',
                        'PublicKey': {'ts': 'string', 'doc': ['Base58 key.']},
                    },
                }, f)
            config = GeneratorConfig.load(path, now='today')

        self.assertEqual(config.bindgen_attribute, 'near')
        self.assertEqual(config.repository, 'https://example.org/repo')
        self.assertEqual(config.extra_types['Gas'], ('number', []))
        self.assertEqual(config.extra_types['PublicKey'], ('string', ['Base58 key.']))
        self.assertEqual(config.now, 'today')

    def test_unreadable_file_keeps_defaults(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            config = GeneratorConfig.load('/nonexistent/nearsyn.json')
        self.assertEqual(config.bindgen_attribute, 'near_bindgen')
        self.assertIn('Warning', stderr.getvalue())

    def test_overrides_skip_none(self):
        config = GeneratorConfig.load(None, now=None, verbose=True)
        self.assertEqual(config.now, '')
        self.assertTrue(config.verbose)


class TestCommandLine(unittest.TestCase):
    """Test the `nearsyn` entry point."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.source = os.path.join(self.tmp.name, 'lib.rs')
        with open(self.source, 'w') as f:
            f.write(CONTRACT_SOURCE)

    def tearDown(self):
        self.tmp.cleanup()

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_ts_to_stdout(self):
        code, out, _ = self.run_main(['ts', self.source, '--no-now'])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith('// TypeScript bindings generated with nearsyn v0.1.0\n'))
        self.assertIn('export const ContractMethods = {', out)

    def test_md_to_file(self):
        output = os.path.join(self.tmp.name, 'docs', 'README.md')
        code, out, _ = self.run_main(['md', self.source, '--now', '2021-01-01', '-o', output])
        self.assertEqual(code, 0)
        self.assertEqual(out, '')
        with open(output) as f:
            content = f.read()
        self.assertIn('## Methods for Contract', content)
        self.assertTrue(content.endswith('*on 2021-01-01*\n'))

    def test_missing_file(self):
        code, _, err = self.run_main(['ts', os.path.join(self.tmp.name, 'missing.rs')])
        self.assertEqual(code, 1)
        self.assertIn('error:', err)

    def test_unsupported_type_fails(self):
        with open(self.source, 'w') as f:
            f.write('#[near_bindgen]\nimpl C {\n    pub fn f(&self) -> u128 { 0 }\n}\n')
        code, out, err = self.run_main(['ts', self.source, '--no-now'])
        self.assertEqual(code, 1)
        self.assertEqual(out, '')
        self.assertIn('u128', err)

    def test_syntax_error_names_file(self):
        with open(self.source, 'w') as f:
            f.write('pub struct {')
        code, _, err = self.run_main(['md', self.source])
        self.assertEqual(code, 1)
        self.assertIn('lib.rs', err)

    def test_invalid_utf8_fails_cleanly(self):
        with open(self.source, 'wb') as f:
            f.write(b'/// caf\xe9\npub type A = u64;\n')
        code, out, err = self.run_main(['ts', '--no-now', self.source])
        self.assertEqual(code, 1)
        self.assertEqual(out, '')
        self.assertIn('error:', err)
        self.assertIn('not valid UTF-8', err)

    def test_warnings_are_summarized(self):
        with open(self.source, 'w') as f:
            f.write('#[derive(Serialize)]\npub enum E {\n    A(u64),\n}\n')
        code, _, err = self.run_main(['ts', self.source, '--no-now'])
        self.assertEqual(code, 0)
        self.assertIn('nearsyn warnings (1):', err)


if __name__ == '__main__':
    # Run tests with verbosity
    unittest.main(verbosity=2)
