# scripts/score_jobs.py
#!/usr/bin/env python3
"""
Score one profile against a batch of job listings (ATS + quick match, no AI calls)

Usage:
    python scripts/score_jobs.py --profile data/profile.yaml --jobs data/jobs.json
    python scripts/score_jobs.py --profile data/profile.json --jobs data/jobs.json --output reports/job_scores.json --top 5
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from datetime import datetime

import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from jobmatch.config import get_config
from jobmatch.models import ResumeProfile, JobListing
from jobmatch.exceptions import JobMatchError
from jobmatch.ats import ATSScorer, QuickMatchScorer

logging.basicConfig(level=logging.WARNING, format='%(message)s')
logger = logging.getLogger(__name__)


def load_profile(profile_file):
    """Load a profile from .yaml/.yml or .json"""
    path = Path(profile_file)
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() in ('.yaml', '.yml'):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    return ResumeProfile.from_dict(data)


def load_jobs(jobs_file):
    """Load job listings from a JSON array or {"jobs": [...]}"""
    with open(jobs_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('jobs', [])

    jobs = []
    for item in data:
        try:
            jobs.append(JobListing.from_dict(item))
        except JobMatchError as e:
            logger.error(f"Skipping job: {e}")

    return jobs


def score_jobs(profile, jobs, config=None):
    """Score every job; returns (job, ats_result, quick_score) tuples, best ATS first"""
    config = config or get_config()
    ats_scorer = ATSScorer(config)
    quick_scorer = QuickMatchScorer()

    scores = []
    for job in jobs:
        logger.info(f"Scoring: {job.title} @ {job.company}")
        scores.append((job, ats_scorer.score(profile, job), quick_scorer.score(profile, job)))

    return sorted(scores, key=lambda x: (x[1].ats_score, x[2]), reverse=True)


def print_ranking(scores):
    """Print ranking table"""
    print("\n" + "=" * 90)
    print(f"{'JOB RANKING':^90}")
    print("=" * 90)

    print(f"{'Rank':<6} {'Job':<40} {'ATS':<10} {'Quick':<10} {'Grade':<8} {'Penalty':<8}")
    print("-" * 90)

    for i, (job, result, quick) in enumerate(scores, 1):
        name = f"{job.title} @ {job.company}" if job.company else job.title

        if len(name) > 39:
            name = name[:36] + "..."

        color = (
            '\033[92m' if result.ats_score >= 80 else
            '\033[93m' if result.ats_score >= 65 else
            '\033[91m'
        )
        reset_color = '\033[0m'

        print(
            f"{i:<6} "
            f"{name:<40} "
            f"{color}{result.ats_score:3d}/100{reset_color}   "
            f"{quick:3d}/100   "
            f"{result.grade:<8} "
            f"-{result.breakdown.gap_penalty:<7}"
        )

    print("=" * 90)
    print()


def print_top_jobs(scores, top_n=5):
    """Print strengths and gaps for the best jobs"""
    print("=" * 90)
    print(f"TOP {min(top_n, len(scores))} JOBS - DETAILED VIEW")
    print("=" * 90)
    print()

    for i, (job, result, quick) in enumerate(scores[:top_n], 1):
        print(f"{i}. {job.title} @ {job.company} ({result.ats_score}/100)")
        print()

        if result.key_strengths:
            print("   Key Strengths:")
            print(f"   {', '.join(result.key_strengths[:5])}")
            print()

        if result.gaps:
            print("   Gaps:")
            for gap in result.gaps[:3]:
                print(f"   • {gap}")
            print()

        print("-" * 90)
        print()


def save_report(scores, profile, output_file):
    """Save JSON report"""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    report = {
        'evaluated_at': datetime.now().isoformat(),
        'profile': profile.to_dict(),
        'total_jobs': len(scores),
        'jobs': []
    }

    for rank, (job, result, quick) in enumerate(scores, 1):
        report['jobs'].append({
            'rank': rank,
            'job_id': job.id,
            'title': job.title,
            'company': job.company,
            'quick_match': quick,
            **result.to_dict(),
            'grade': result.grade,
        })

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2, ensure_ascii=False)

    print(f"✓ Report saved to: {output_file}")


def main():
    parser = argparse.ArgumentParser(
        description='Score a profile against a batch of job listings'
    )

    parser.add_argument(
        '--profile',
        required=True,
        help='Path to the profile (.yaml or .json)'
    )

    parser.add_argument(
        '--jobs',
        required=True,
        help='Path to job listings (.json)'
    )

    parser.add_argument(
        '--output',
        help='Output file for the report (JSON)'
    )

    parser.add_argument(
        '--top',
        type=int,
        default=5,
        help='Number of top jobs to show details for'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every job as it is scored'
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        profile = load_profile(args.profile)
        jobs = load_jobs(args.jobs)

        if not jobs:
            print("ERROR: No job listings found")
            sys.exit(1)

        print(f"Scoring {len(jobs)} job(s) for: {profile.current_title or 'profile'}")
        scores = score_jobs(profile, jobs)

        print_ranking(scores)
        print_top_jobs(scores, args.top)

        if args.output:
            save_report(scores, profile, args.output)

        sys.exit(0)

    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"ERROR: {e}")
        sys.exit(2)


if __name__ == '__main__':
    main()
