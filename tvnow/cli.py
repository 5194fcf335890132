"""
CLIインターフェースモジュール

このモジュールはTVNowのコマンドライン操作を提供します。
- 現在放送中の番組表示（デフォルト）
- 今日の番組表（-t）・1週間の番組表（-w）
- エリア一覧表示（-a）
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Callable, List, Mapping, Optional

import pytz

from . import __version__
from .area_resolver import AreaResolver
from .error_handler import ErrorHandler, TVNowError
from .logging_config import setup_logging
from .output_formatter import OutputFormatter, should_use_color
from .schedule_fetcher import BangumiFetcher
from .schedule_normalizer import ScheduleNormalizer
from .schedule_resolver import ScheduleResolver, ScheduleView, ViewMode
from .utils.base import LoggerMixin
from .utils.config_utils import DEFAULT_CONFIG_PATH, ConfigManager


class TVNowCLI(LoggerMixin):
    """TVNow CLIメインクラス"""
    
    VERSION = __version__
    
    def __init__(self,
                 fetcher: Optional[BangumiFetcher] = None,
                 area_resolver: Optional[AreaResolver] = None,
                 normalizer: Optional[ScheduleNormalizer] = None,
                 resolver: Optional[ScheduleResolver] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 stdout: Optional[IO] = None,
                 stderr: Optional[IO] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        
        super().__init__()
        
        # コンポーネント（依存性注入対応、未指定時は設定読み込み後に生成）
        self.fetcher = fetcher
        self.area_resolver = area_resolver
        self.normalizer = normalizer or ScheduleNormalizer()
        self.resolver = resolver or ScheduleResolver()
        self.error_handler = error_handler or ErrorHandler()
        
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.clock = clock or (lambda: datetime.now(pytz.utc))
        self.environ = environ
        self.config = {}
    
    def create_parser(self) -> argparse.ArgumentParser:
        """コマンドライン引数パーサーを作成"""
        parser = argparse.ArgumentParser(
            prog='tvnow',
            description='テレビ番組表を表示します（デフォルトは現在放送中の番組）',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
使用例:
  tvnow                 # 現在放送中の番組（TV_AREA または tokyo）
  tvnow osaka           # 大阪エリアの現在の番組
  tvnow -t bs           # BSの今日の番組表
  tvnow -w tokyo osaka  # 東京・大阪の1週間の番組表
  tvnow -a              # エリア一覧
            """
        )
        
        mode = parser.add_mutually_exclusive_group()
        mode.add_argument('-t', '--today', action='store_true', help="今日の番組表を表示")
        mode.add_argument('-w', '--week', action='store_true', help="1週間の番組表を表示")
        mode.add_argument('-a', '--area', action='store_true', help="エリア一覧を表示")
        
        parser.add_argument('areas', metavar='AREA', nargs='*',
                            help="エリア名（複数指定可、省略時は環境変数 TV_AREA）")
        parser.add_argument('--version', action='version', version=f'tvnow {self.VERSION}')
        parser.add_argument('--config', help='設定ファイルパス', default=str(DEFAULT_CONFIG_PATH))
        parser.add_argument('--verbose', '-v', action='store_true', help='詳細ログを表示')
        
        return parser
    
    def run(self, args: List[str] = None) -> int:
        """CLIメインエントリーポイント（終了コードを返す）"""
        parser = self.create_parser()
        try:
            parsed_args = parser.parse_args(args)
        except SystemExit as e:
            # --help / --version / 引数エラー
            return e.code if isinstance(e.code, int) else 1
        
        try:
            self._load_config(parsed_args.config)
            self._setup_logging(parsed_args.verbose)
            self._initialize_components()
            
            if parsed_args.area:
                return self._cmd_list_areas()
            
            return self._cmd_show(parsed_args.areas, self._get_mode(parsed_args))
            
        except KeyboardInterrupt:
            self.stderr.write("操作がキャンセルされました\n")
            return 1
        except TVNowError as e:
            self.stderr.write(f"{e}\n")
            return self.error_handler.handle_error(e)
    
    def _load_config(self, config_path: str) -> None:
        """設定ファイルを読み込み"""
        config_manager = ConfigManager(Path(config_path))
        self.config = config_manager.load_config()
        config_manager.validate_config(self.config)
    
    def _setup_logging(self, verbose: bool = False) -> None:
        """ログ設定"""
        setup_logging(
            log_level='DEBUG' if verbose else self.config.get('log_level'),
            log_file=self.config.get('log_file') or None,
            console_output=verbose or None,
            force=True
        )
    
    def _initialize_components(self) -> None:
        """注入されていないコンポーネントを設定から生成"""
        if self.area_resolver is None:
            self.area_resolver = AreaResolver(environ=self.environ,
                                              default_area=self.config.get('default_area'))
        if self.fetcher is None:
            self.fetcher = BangumiFetcher(timeout=self.config['request_timeout'],
                                          max_workers=self.config['max_workers'])
        self.formatter = OutputFormatter(color=should_use_color(self.stdout, self.config.get('color', 'auto')))
    
    @staticmethod
    def _get_mode(parsed_args: argparse.Namespace) -> ViewMode:
        if parsed_args.today:
            return ViewMode.TODAY
        if parsed_args.week:
            return ViewMode.WEEK
        return ViewMode.NOW
    
    def _cmd_list_areas(self) -> int:
        """エリア一覧コマンド"""
        self.formatter.write_lines(self.formatter.format_area_list(self.area_resolver.list_areas()),
                                   self.stdout)
        return 0
    
    def _cmd_show(self, tokens: List[str], mode: ViewMode) -> int:
        """番組表表示コマンド
        
        全エリアを先に解決し、全エリアの取得が成功してから出力する。
        """
        areas = self.area_resolver.resolve_all(tokens)
        reference = self.clock()
        
        views: List[ScheduleView] = []
        for area in areas:
            raw_listings = self.fetcher.fetch(area, mode, reference)
            schedule = self.normalizer.normalize(raw_listings, area)
            views.append(self.resolver.resolve(schedule, mode, reference))
        
        for view in views:
            header = self.formatter.format_area_header(view.area) if len(views) > 1 else None
            self.formatter.write_view(view, self.stdout, header)
            self.formatter.write_lines(self.formatter.format_warnings(view.warnings), self.stderr)
        
        return 0


def main():
    """メインエントリーポイント"""
    cli = TVNowCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
