#!/usr/bin/env python3
"""
🏀 FANTASY ANALYTICS
Rankings, consistency grades, hot players, trades and waiver pickups.

Usage:
    fantasy-analytics rank --metric projection --window 14 --limit 20
    fantasy-analytics consistency --window 14
    fantasy-analytics hot --recent 7 --baseline 30
    fantasy-analytics trade -a p1 -a p2 -b p3
    fantasy-analytics waiver --date 2024-07-12 --exclude-top-n 50

Inputs are read from the data directory (``--data-dir`` or FANTASY_DATA_DIR):
    players.csv, stats.csv, scoring_configs.json,
    schedule.csv, defensive_ratings.csv
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from loguru import logger

from ..analytics.hot import trend_direction
from ..analytics.ranking import RankingMetric
from ..data.loaders import (
    load_defensive_ratings, load_players, load_schedule, load_scoring_configs, load_stat_lines,
    frame_from_stat_lines,
)
from ..errors import AnalyticsError
from ..models.catalog import ScoringConfigCatalog
from ..models.player import Position
from ..models.results import InsufficientSample, TradeProposal
from ..models.scoring_config import SYSTEM_OWNER
from ..scoring.formula import score_frame
from ..service import AnalyticsService

load_dotenv()

PLAYERS_FILE = 'players.csv'
STATS_FILE = 'stats.csv'
CONFIGS_FILE = 'scoring_configs.json'
SCHEDULE_FILE = 'schedule.csv'
RATINGS_FILE = 'defensive_ratings.csv'


def configure_logging(level: str):
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


class Context:
    """Loaded inputs shared by every command."""

    def __init__(self, data_dir: Path, owner: str, config_id: Optional[str]):
        self.data_dir = data_dir
        self.owner = owner
        self.config_id = config_id
        self._service = None

    def path(self, name: str) -> Path:
        return self.data_dir / name

    @property
    def service(self) -> AnalyticsService:
        if self._service is None:
            configs_path = self.path(CONFIGS_FILE)
            catalog = ScoringConfigCatalog(load_scoring_configs(configs_path) if configs_path.exists() else [])
            self._service = AnalyticsService(
                load_players(self.path(PLAYERS_FILE)),
                load_stat_lines(self.path(STATS_FILE)),
                catalog=catalog,
            )
        return self._service

    @property
    def scoring(self):
        return self.service.resolve_scoring(self.owner, self.config_id)

    def name_of(self, player_id: str) -> str:
        player = self.service.player(player_id)
        return player.name if player else player_id


def print_header(title: str, ctx: Context):
    scoring = ctx.scoring
    print(title)
    print("=" * 60)
    print(f"Scoring: {scoring.name or scoring.id} ({scoring.owner_id})")
    print("=" * 60)


def run(fn):
    """Map analytics errors to a message and exit code 1."""
    try:
        return fn()
    except AnalyticsError as e:
        click.secho(f"❌ {e}", fg='red', err=True)
        sys.exit(1)


@click.group()
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path),
              default=lambda: os.getenv('FANTASY_DATA_DIR', 'data'),
              help='Directory holding the input files')
@click.option('--owner', default=SYSTEM_OWNER, help='Owner whose scoring configuration is used')
@click.option('--config-id', default=None, help='Scoring configuration id (default: owner default)')
@click.option('--log-level', default=lambda: os.getenv('FANTASY_LOG_LEVEL', 'WARNING'),
              help='Log level')
@click.pass_context
def cli(ctx, data_dir: Path, owner: str, config_id: Optional[str], log_level: str):
    """🏀 Fantasy basketball analytics"""
    configure_logging(log_level)
    ctx.obj = Context(data_dir, owner, config_id)


@cli.command()
@click.option('--player', 'player_id', default=None, help='Only this player')
@click.pass_obj
def score(ctx: Context, player_id: Optional[str]):
    """Fantasy points per game."""
    def _score():
        lines = ctx.service.stat_lines
        if player_id:
            lines = [line for line in lines if line.player_id == player_id]
        df = score_frame(frame_from_stat_lines(list(lines)), ctx.scoring)

        print_header("📊 FANTASY POINTS", ctx)
        if df.empty:
            print("No games found")
            return
        for _, row in df.iterrows():
            print(f"  {row['date']}  {ctx.name_of(row['player_id']):<24} "
                  f"vs {row['opponent_team'] or '-':<6} {row['fantasy_points']:>7.2f}")

    run(_score)


@cli.command()
@click.option('--metric', type=click.Choice([m.value for m in RankingMetric]),
              default=RankingMetric.WINDOW_AVERAGE.value, help='Ranking metric')
@click.option('--window', type=int, default=None, help='Trailing game window')
@click.option('--position', type=click.Choice([p.value for p in Position]), default=None)
@click.option('--limit', type=int, default=25)
@click.pass_obj
def rank(ctx: Context, metric: str, window: Optional[int], position: Optional[str], limit: int):
    """Rank players by fantasy points."""
    def _rank():
        ranking = ctx.service.rankings(
            ctx.scoring, metric=RankingMetric(metric), window=window,
            position=Position(position) if position else None, limit=limit,
        )
        print_header(f"🏆 RANKINGS ({metric})", ctx)
        for i, entry in enumerate(ranking, 1):
            print(f"  {i:>3}. {ctx.name_of(entry.player_id):<24} {entry.value:>8.2f}  "
                  f"({entry.games_counted} games)")
        if ranking.insufficient_data:
            print(f"\n⚠️ No games: {', '.join(ranking.insufficient_data)}")

    run(_rank)


@cli.command()
@click.option('--window', type=int, default=14, help='Games in the window')
@click.pass_obj
def consistency(ctx: Context, window: int):
    """Consistency grades (coefficient of variation)."""
    def _consistency():
        results = ctx.service.consistency(ctx.scoring, window)
        graded = sorted((r for r in results if not isinstance(r, InsufficientSample)),
                        key=lambda r: (r.coefficient_of_variation, r.player_id))
        insufficient = [r for r in results if isinstance(r, InsufficientSample)]

        print_header(f"📈 CONSISTENCY (last {window} games)", ctx)
        for r in graded:
            print(f"  {r.grade:<3} {ctx.name_of(r.player_id):<24} CV {r.coefficient_of_variation:.3f}")
        if insufficient:
            print(f"\n⚠️ Insufficient sample: {', '.join(r.player_id for r in insufficient)}")

    run(_consistency)


@cli.command()
@click.option('--recent', type=int, default=None, help='Recent window (games)')
@click.option('--baseline', type=int, default=None, help='Baseline window (games, default season)')
@click.option('--all', 'show_all', is_flag=True, help='Show every player, not only hot ones')
@click.pass_obj
def hot(ctx: Context, recent: Optional[int], baseline: Optional[int], show_all: bool):
    """Players trending above their baseline."""
    def _hot():
        results = ctx.service.hot_players(ctx.scoring, recent, baseline, hot_only=not show_all)

        print_header("🔥 HOT PLAYERS", ctx)
        if not results:
            print("No hot players")
        for r in results:
            if r.not_evaluable:
                print(f"  {ctx.name_of(r.player_id):<24} not evaluable")
                continue
            flag = "🔥" if r.is_hot else "  "
            print(f"  {flag} {ctx.name_of(r.player_id):<24} {r.recent_average:>6.1f} vs "
                  f"{r.baseline_average:>6.1f}  x{r.trend_ratio:.2f} ({trend_direction(r).value})")

    run(_hot)


@cli.command()
@click.option('-a', '--side-a', multiple=True, required=True, help='Player id on side A')
@click.option('-b', '--side-b', multiple=True, required=True, help='Player id on side B')
@click.option('--window', type=int, default=None, help='Trailing game window for values')
@click.option('--weight-consistency', is_flag=True, help='Weight values by consistency grade')
@click.pass_obj
def trade(ctx: Context, side_a, side_b, window: Optional[int], weight_consistency: bool):
    """Compare the value of two groups of players."""
    def _trade():
        proposal = TradeProposal(frozenset(side_a), frozenset(side_b), ctx.scoring.id)
        analysis = ctx.service.analyze_trade(proposal, ctx.scoring, window=window,
                                             weight_by_consistency=weight_consistency)

        print_header("🤝 TRADE ANALYSIS", ctx)
        print(f"  Side A: {analysis.side_a_value:>8.2f}")
        print(f"  Side B: {analysis.side_b_value:>8.2f}")
        print(f"  Net:    {analysis.net_value:>+8.2f}")
        print(f"\n🎯 Recommendation: {analysis.recommendation.value} "
              f"(confidence {analysis.confidence:.0%})")
        for line in analysis.reasoning:
            print(f"   - {line}")

    run(_trade)


@cli.command()
@click.option('--date', 'target_date', required=True, type=click.DateTime(formats=['%Y-%m-%d']))
@click.option('--exclude', multiple=True, help='Player id to exclude (owned, etc.)')
@click.option('--exclude-top-n', type=int, default=0, help='Exclude the top N players by value')
@click.option('--limit', type=int, default=None)
@click.pass_obj
def waiver(ctx: Context, target_date: datetime, exclude, exclude_top_n: int, limit: Optional[int]):
    """Waiver wire pickups for a game day."""
    def _waiver():
        schedule = load_schedule(ctx.path(SCHEDULE_FILE))
        ratings_path = ctx.path(RATINGS_FILE)
        ratings = load_defensive_ratings(ratings_path) if ratings_path.exists() else {}

        recommendations = ctx.service.waiver_recommendations(
            target_date.date(), ctx.scoring, schedule, ratings,
            excluded=exclude, exclude_top_n=exclude_top_n, limit=limit,
        )

        print_header(f"📋 WAIVER WIRE {target_date.date().isoformat()}", ctx)
        if not recommendations:
            print("No available players")
        for r in recommendations:
            print(f"  {r.rank:>2}. {ctx.name_of(r.player_id):<24} vs {r.opponent_team:<6} "
                  f"proj {r.projected_points:>6.1f}  matchup {r.matchup_favorability:.2f}  "
                  f"score {r.composite_score:>6.1f}")
            if r.reasoning:
                print(f"      {'; '.join(r.reasoning)}")

    run(_waiver)


def main():
    cli()


if __name__ == "__main__":
    main()
