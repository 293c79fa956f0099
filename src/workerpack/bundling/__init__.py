"""
Bundling: the compiler contract, its esbuild back-ends and the builder.
"""

from workerpack.bundling.base import Compiler, CompileRequest
from workerpack.bundling.builder import BundleBuilder, build_constant_table, CONSTANT_KEYS
from workerpack.bundling.manager import CompilerManager, get_compiler
