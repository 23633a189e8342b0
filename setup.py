"""
Opcode Coverage Tools - Cython Setup
トレーススキャナのCythonコンパイル設定

コンパイル対象：
1. scanner.py → scanner.so（トレース走査ループ、最大の効果）
"""
from setuptools import setup, find_packages
from Cython.Build import cythonize
import numpy as np

# PyBoy互換のコンパイラディレクティブ
compiler_directives = {
    "boundscheck": False,        # 配列境界チェック無効（高速化）
    "cdivision": True,           # C言語式整数除算
    "wraparound": False,         # 負のインデックス無効
    "infer_types": True,         # 型推論で最適化
    "initializedcheck": False,   # 初期化チェック無効
    "nonecheck": False,          # Noneチェック無効
    "overflowcheck": False,      # オーバーフローチェック無効
    "language_level": "3",       # Python 3構文
}

# コンパイル対象モジュール
modules_to_compile = [
    "src/opcov/scanner.py",    # トレース走査（バイト単位ループ）
    # "src/opcov/differ.py",   # 行単位の集合演算のみ、効果なし
]

setup(
    name="opcov",
    version="0.1.0",
    description="Opcode coverage scanner and report differ for Game Boy execution traces",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "numpy",
        "Cython",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "opcov-scanner=opcov.cli:scanner_main",
            "opcov-differ=opcov.cli:differ_main",
        ],
    },
    ext_modules=cythonize(
        modules_to_compile,
        compiler_directives=compiler_directives,
        annotate=True,  # HTMLアノテーションファイル生成（最適化分析用）
    ),
    include_dirs=[np.get_include()],  # NumPy配列用
    python_requires=">=3.8",
    zip_safe=False,
)
