# https://github.com/pyinvoke/invoke/issues/833
import inspect
import os
import shutil

from invoke import run, task

if not hasattr(inspect, "getargspec"):
    inspect.getargspec = inspect.getfullargspec


@task
def devenv(c):
    """Brings up a Redis master watched by a Sentinel on port 26379."""
    clean(c)
    run("docker run -d --name sentinel-listener-redis -p 6379:6379 redis:7")
    run(
        "docker run -d --name sentinel-listener-sentinel -p 26379:26379 "
        "--link sentinel-listener-redis:redis redis:7 sh -c "
        "'printf \"port 26379\\nsentinel resolve-hostnames yes\\n"
        "sentinel monitor mymaster redis 6379 1\\n\" > /tmp/sentinel.conf "
        "&& redis-sentinel /tmp/sentinel.conf'"
    )


@task
def linters(c):
    """Run code linters"""
    run("ruff check tests sentinel_listener")
    run("ruff format --check --diff tests sentinel_listener")


@task
def all_tests(c):
    """Run all linters, and tests in sentinel-listener."""
    linters(c)
    tests(c)


@task
def tests(c, sentinel_url=None):
    """Run the test suite against the current python."""
    print("Starting Sentinel listener tests")
    url_arg = f"--sentinel-url={sentinel_url}" if sentinel_url else ""
    run(
        f"pytest {url_arg} --cov=./ --cov-report=xml:coverage.xml "
        "--junit-xml=results.xml"
    )


@task
def unit_tests(c):
    """Run the tests that don't need a running Sentinel"""
    run("pytest -m 'not onlysentinel'")


@task
def clean(c):
    """Stop all dockers, and clean up the built binaries, if generated."""
    if os.path.isdir("build"):
        shutil.rmtree("build")
    if os.path.isdir("dist"):
        shutil.rmtree("dist")
    run(
        "docker rm -f sentinel-listener-sentinel sentinel-listener-redis",
        warn=True,
    )


@task
def package(c):
    """Create the python packages"""
    run("python -m build .")
