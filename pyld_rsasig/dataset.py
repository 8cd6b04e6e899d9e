## An implementation of the Linked Data Signatures specification for JSON-LD.
##
## Author: Christopher Allan Webber <cwebber@dustycloud.org>
##
## BSD 3-Clause License
## Copyright (c) 2017 Spec-Ops.
##
## Redistribution and use in source and binary forms, with or without
## modification, are permitted provided that the following conditions are met:
##
## Redistributions of source code must retain the above copyright notice,
## this list of conditions and the following disclaimer.
##
## Redistributions in binary form must reproduce the above copyright
## notice, this list of conditions and the following disclaimer in the
## documentation and/or other materials provided with the distribution.
##
## Neither the name of the Spec-Ops nor the names of its contributors
## may be used to endorse or promote products derived from this
## software without specific prior written permission.
##
## THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
## IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
## TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
## PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
## HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
## SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
## TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
## PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
## LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
## NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
## SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""
A minimal RDF dataset: a set of quads whose terms use pyld's RDF
vocabulary, convertible to and from the dataset dicts pyld produces
(`jsonld.to_rdf`) and consumes (URDNA2015).
"""

from collections import namedtuple

from pyld import jsonld

from .errors import DatasetError

IRI = 'IRI'
BLANK_NODE = 'blank node'
LITERAL = 'literal'

XSD_STRING = 'http://www.w3.org/2001/XMLSchema#string'
RDF_LANGSTRING = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#langString'


class Term(namedtuple('Term', ['kind', 'value', 'datatype', 'language'])):
    """
    An RDF term.  KIND is one of IRI, BLANK_NODE or LITERAL; blank node
    values carry their "_:" prefix as in pyld.
    """
    __slots__ = ()

    def is_iri(self):
        return self.kind == IRI

    def is_blank_node(self):
        return self.kind == BLANK_NODE

    def is_literal(self):
        return self.kind == LITERAL

    def to_pyld(self):
        term = {'type': self.kind, 'value': self.value}
        if self.kind == LITERAL:
            term['datatype'] = self.datatype or XSD_STRING
            if self.language is not None:
                term['language'] = self.language
        return term

    @classmethod
    def from_pyld(cls, term):
        try:
            kind = term['type']
            value = term['value']
        except (KeyError, TypeError) as e:
            raise DatasetError("malformed RDF term: %r" % (term,)) from e
        if kind == LITERAL:
            datatype = term.get('datatype') or XSD_STRING
            return cls(kind, value, datatype, term.get('language'))
        if kind not in (IRI, BLANK_NODE):
            raise DatasetError("unknown RDF term type: %r" % (kind,))
        return cls(kind, value, None, None)


def iri(value):
    return Term(IRI, value, None, None)

def blank_node(value):
    if not value.startswith('_:'):
        value = '_:' + value
    return Term(BLANK_NODE, value, None, None)

def literal(value, datatype=XSD_STRING, language=None):
    if language is not None:
        datatype = RDF_LANGSTRING
    return Term(LITERAL, value, datatype, language)


class Quad(namedtuple('Quad', ['subject', 'predicate', 'object', 'graph'])):
    """A quad; GRAPH is None for the default graph."""
    __slots__ = ()

    def __new__(cls, subject, predicate, object, graph=None):
        return super().__new__(cls, subject, predicate, object, graph)


class Dataset(object):
    """A set of quads: no duplicates, no ordering."""

    def __init__(self, quads=()):
        self._quads = set()
        for quad in quads:
            self.add(quad)

    @classmethod
    def from_quads(cls, quads):
        """Collect a (possibly lazy) sequence of quads into a dataset."""
        return cls(quads)

    def add(self, quad):
        if not isinstance(quad, Quad):
            quad = Quad(*quad)
        self._quads.add(quad)

    def insert(self, subject, predicate, object, graph=None):
        self.add(Quad(subject, predicate, object, graph))

    def __iter__(self):
        return iter(self._quads)

    def __len__(self):
        return len(self._quads)

    def __contains__(self, quad):
        return quad in self._quads

    def __eq__(self, other):
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._quads == other._quads

    def __repr__(self):
        return "<Dataset of %d quads>" % len(self._quads)

    def quads_matching(self, subject=None, predicate=None, where=None):
        """Yield quads with the given subject and predicate whose object
        satisfies WHERE, a predicate on terms."""
        for quad in self._quads:
            if subject is not None and quad.subject != subject:
                continue
            if predicate is not None and quad.predicate != predicate:
                continue
            if where is not None and not where(quad.object):
                continue
            yield quad

    # pyld interop

    @classmethod
    def from_pyld(cls, rdf_dataset):
        """Build a dataset from the dict returned by `jsonld.to_rdf`."""
        dataset = cls()
        for graph_name, triples in rdf_dataset.items():
            if graph_name == '@default':
                graph = None
            elif graph_name.startswith('_:'):
                graph = Term(BLANK_NODE, graph_name, None, None)
            else:
                graph = Term(IRI, graph_name, None, None)
            for triple in triples:
                try:
                    parts = (triple['subject'], triple['predicate'],
                             triple['object'])
                except (KeyError, TypeError) as e:
                    raise DatasetError(
                        "malformed RDF triple: %r" % (triple,)) from e
                dataset.add(Quad(*(Term.from_pyld(t) for t in parts),
                                 graph=graph))
        return dataset

    def to_pyld(self):
        """
        Return a fresh pyld dataset dict.  pyld's canonicalizer mutates
        what it is given, so every call builds new term dicts.
        """
        rdf_dataset = {'@default': []}
        for quad in self._quads:
            if quad.graph is None:
                graph_name = '@default'
            else:
                graph_name = quad.graph.value
            rdf_dataset.setdefault(graph_name, []).append({
                'subject': quad.subject.to_pyld(),
                'predicate': quad.predicate.to_pyld(),
                'object': quad.object.to_pyld()})
        return rdf_dataset

    @classmethod
    def from_nquads(cls, text):
        try:
            rdf_dataset = jsonld.JsonLdProcessor.parse_nquads(text)
        except jsonld.JsonLdError as e:
            raise DatasetError("could not parse N-Quads: %s" % e) from e
        return cls.from_pyld(rdf_dataset)
