# sync_value.py
"""
命令行：对单个属性值做导出映射或依赖提取

用法：
  python sync_value.py export value.json
  python sync_value.py deps value.json --flags 96 --registry specs/registry.yaml
"""
import argparse
import json
import logging
import os
import sys

from config import CONTENT_BLOCKS_EDITOR_ALIAS, LOG_LEVEL
from service.sync_service import build_factory, collect_dependencies, export_value


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_output(text: str, output_path) -> None:
    if not output_path:
        print(text)
        return
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Content Blocks 值映射：导出 / 依赖提取")
    parser.add_argument("command", choices=["export", "deps"], help="export：导出映射；deps：依赖提取")
    parser.add_argument("input", help="属性值文件路径（- 表示 stdin）")
    parser.add_argument("--editor", default=CONTENT_BLOCKS_EDITOR_ALIAS, help="属性编辑器别名")
    parser.add_argument("--registry", default=None, help="block 定义 / 数据类型登记 YAML（可选）")
    parser.add_argument("--flags", type=int, default=0, help="依赖标志位（整数）")
    parser.add_argument("--output", default=None, help="输出文件路径（可选，默认 stdout）")

    args = parser.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    factory = build_factory(args.registry)
    raw = _read_input(args.input)

    if args.command == "export":
        result = export_value(raw, args.editor, factory=factory)
        _write_output(result if result is not None else "", args.output)
    else:
        report = collect_dependencies(raw, args.editor, args.flags, factory=factory)
        _write_output(json.dumps(report.to_dict(), ensure_ascii=False, indent=2), args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
