"""``python -m lupus_manager`` エントリポイント。

uvicorn をプログラム的に起動する。

Usage::

    uv run python -m lupus_manager                 # 通常起動
    uv run python -m lupus_manager --port 8080     # ポート指定
"""

from __future__ import annotations

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Lupus Manager Web サーバー")
    parser.add_argument("--host", default="127.0.0.1", help="バインドホスト (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="バインドポート (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="ファイル変更時に自動リロード")
    args = parser.parse_args()

    uvicorn.run("lupus_manager.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
