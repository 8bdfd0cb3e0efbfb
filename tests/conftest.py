"""Pytest configuration and fixtures for goutline tests."""


import pytest


class FakeNode:
    """Stand-in for a tree-sitter node, for tests that don't need the Go grammar."""

    def __init__(self, type, start=0, end=0, children=(), fields=None, named=True):
        self.type = type
        self.start_byte = start
        self.end_byte = end
        self.children = list(children)
        self.fields = fields or {}
        self.is_named = named
        self.is_missing = False
        self.has_error = False

    @property
    def named_children(self):
        return [child for child in self.children if child.is_named]

    def child_by_field_name(self, name):
        nodes = self.fields.get(name)
        return nodes[0] if nodes else None

    def children_by_field_name(self, name):
        return list(self.fields.get(name, []))


@pytest.fixture
def make_node():
    """Factory for FakeNode trees."""
    return FakeNode


@pytest.fixture
def go_parser_available():
    """Skip unless the tree-sitter Go grammar is installed."""
    pytest.importorskip("tree_sitter_language_pack")
    from goutline.parser import TREE_SITTER_AVAILABLE
    if not TREE_SITTER_AVAILABLE:
        pytest.skip("tree-sitter Go grammar not installed")
    return True


@pytest.fixture
def sample_go_source():
    """A Go file touching every declaration kind."""
    return b'''// Package demo is a sample.
package demo

import "fmt"

import (
	"os"
	str "strings"
)

type Server struct {
	name string
}

type (
	ID    int
	Alias = string
)

var a, b = 1, 2

const (
	Max = 10
	Min
)

var (
	x    int
	y, z string
)

func New(name string) *Server {
	return &Server{name: name}
}

func (s *Server) Run() error {
	fmt.Println(s.name, os.Args, str.ToUpper("x"))
	return nil
}

func (s Server) Name() string { return s.name }

type List[T any] struct {
	items []T
}

func (l *List[T]) Push(v T) { l.items = append(l.items, v) }

type Pair[K comparable, V any] struct {
	key K
	val V
}

func (p Pair[K, V]) Key() K { return p.key }
'''


@pytest.fixture
def imports_only_go_source():
    return b'''package tools

import (
	"bytes"
	"fmt"
)

import "os"
'''


@pytest.fixture
def go_file(tmp_path, sample_go_source):
    """Write the sample Go file into a temporary directory."""
    path = tmp_path / "demo.go"
    path.write_bytes(sample_go_source)
    return path


def make_archive(entries):
    """Encode (path, bytes) pairs as an overlay archive."""
    data = b""
    for path, content in entries:
        data += path.encode() + b"\n" + str(len(content)).encode() + b"\n" + content
    return data


@pytest.fixture
def archive_factory():
    return make_archive
