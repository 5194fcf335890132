#!/usr/bin/env python3
"""
TVNow - テレビ番組表表示ツール

このファイルはTVNowのメインエントリーポイントです。

使用例:
    # 現在放送中の番組（環境変数 TV_AREA、未設定なら東京）
    python TVNow.py

    # 大阪エリアの今日の番組表
    python TVNow.py -t osaka

    # エリア一覧
    python TVNow.py -a
"""

import sys

from tvnow.cli import TVNowCLI


def main():
    """メインエントリーポイント"""
    try:
        exit_code = TVNowCLI().run(sys.argv[1:])
    except KeyboardInterrupt:
        print("\n操作がキャンセルされました", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
