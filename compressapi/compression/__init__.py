"""
Response compression: negotiation, gating, buffered and streaming compression.
"""
from .buffered import BufferedCompressor
from .codecs import compress, create_stream_encoder, wrap_stream
from .gate import CompressibilityGate, is_compressible_type
from .negotiation import negotiate_encoding, parse_accept_encoding
from .pipeline import CompressionPipeline
from .responses import ResponseHeaders, merge_vary, rewrite_response
from .streaming import StreamingCompressor

__all__ = [
    "BufferedCompressor",
    "CompressibilityGate",
    "CompressionPipeline",
    "ResponseHeaders",
    "StreamingCompressor",
    "compress",
    "create_stream_encoder",
    "is_compressible_type",
    "merge_vary",
    "negotiate_encoding",
    "parse_accept_encoding",
    "rewrite_response",
    "wrap_stream",
]
