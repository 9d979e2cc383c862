"""Main entry point for the distributed keyspace search."""

import logging
import sys
import time
from typing import List, Optional
from shared.config.config import config, build_search_configuration
from shared.config.log_setup import configure_logging
from shared.domain.consts import ExitCode, Rank, TransportName
from shared.domain.models import SearchConfiguration, SearchResult
from shared.factories.verifier_factory import create_verifier
from shared.infrastructure.process_group import LocalProcessGroup
from coordinator.services.coordinator import Coordinator
from worker.services.worker import run_worker_process

logger = logging.getLogger(__name__)

USAGE = "Usage: python main.py <password_hash>"
GROUP_SIZE_HINT = "Requires at least 2 processes (1 coordinator, 1+ workers)."


def load_search_configuration(argv: List[str]) -> SearchConfiguration:
    """
    Validate the command line and configuration into search parameters.

    The verifier is built once here so an unusable hash fails before any
    worker starts.

    Raises:
        ValueError: On a bad argument count, hash or configuration
            (pydantic's ValidationError is a ValueError).
    """
    if len(argv) != 1:
        raise ValueError(USAGE)

    target_hash = argv[0].strip()
    search_config = build_search_configuration(target_hash, config)
    create_verifier(target_hash, search_config.hash_scheme)
    return search_config


def print_header(search_config: SearchConfiguration, worker_count: int) -> None:
    print("Starting distributed password search with dynamic load balancing...")
    print(f"Coordinator: Process {Rank.COORDINATOR}")
    print(f"Workers: {worker_count}")
    print(f"Target hash: {search_config.target_hash}")
    print(
        f"Lengths {search_config.min_length}-{search_config.max_length} over "
        f"{len(search_config.charset)} symbols, chunk size {search_config.chunk_size}"
    )


def print_result(result: SearchResult) -> None:
    """Print the final result block."""
    if result.found:
        print("\n========================================")
        print("PASSWORD FOUND!")
        print(f"Process {result.finder_rank} found: {result.candidate}")
        print(f"Time taken: {result.elapsed_seconds:.2f} seconds")
        print("========================================")
    else:
        print("\nPassword not found within the specified constraints.")
        print(f"Candidates examined: {result.candidates_dispatched}")
        print(f"Time taken: {result.elapsed_seconds:.2f} seconds")


def run_local(argv: List[str]) -> int:
    """Run the coordinator here and the workers as local processes."""
    if config.NUM_WORKERS < 1:
        print(USAGE)
        print(GROUP_SIZE_HINT)
        return ExitCode.CONFIG_ERROR

    try:
        search_config = load_search_configuration(argv)
    except ValueError as e:
        print(USAGE)
        logger.error(f"Invalid configuration: {e}")
        return ExitCode.CONFIG_ERROR

    print_header(search_config, config.NUM_WORKERS)
    start_time = time.time()

    group = LocalProcessGroup(config.NUM_WORKERS)
    group.start(run_worker_process, search_config, start_time, config.LOG_LEVEL)
    try:
        coordinator = Coordinator(
            group.coordinator_transport(),
            search_config,
            start_time=start_time,
            progress_every_chunks=config.PROGRESS_EVERY_CHUNKS,
        )
        result = coordinator.run()
    except KeyboardInterrupt:
        logger.warning("Interrupted, terminating workers")
        group.terminate()
        raise

    exit_codes = group.join()
    print_result(result)

    if any(code != 0 for code in exit_codes):
        return ExitCode.WORKER_FAILED
    return ExitCode.OK


def run_mpi(argv: List[str]) -> int:
    """Run this process as one rank of an ``mpiexec`` launched group."""
    from shared.implementations.transports.mpi_transport import MpiTransport

    transport = MpiTransport()

    if transport.rank == Rank.COORDINATOR:
        error: Optional[str] = None
        if transport.size < Rank.MIN_GROUP_SIZE:
            error = GROUP_SIZE_HINT
        else:
            try:
                search_config = load_search_configuration(argv)
            except ValueError as e:
                error = f"Invalid configuration: {e}"

        if error is not None:
            print(USAGE)
            print(error)
            transport.abort(ExitCode.CONFIG_ERROR)
            return ExitCode.CONFIG_ERROR

        print_header(search_config, transport.worker_count)
        payload = (search_config.model_dump(mode="json"), time.time())
    else:
        payload = None

    config_data, start_time = transport.bcast(payload)
    search_config = SearchConfiguration.model_validate(config_data)

    if transport.rank == Rank.COORDINATOR:
        coordinator = Coordinator(
            transport,
            search_config,
            start_time=start_time,
            progress_every_chunks=config.PROGRESS_EVERY_CHUNKS,
        )
        print_result(coordinator.run())
    else:
        run_worker_process(transport, search_config, start_time, config.LOG_LEVEL)
    return ExitCode.OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(config.LOG_LEVEL)

    if config.TRANSPORT == TransportName.MPI:
        return run_mpi(argv)
    if config.TRANSPORT != TransportName.LOCAL:
        print(USAGE)
        logger.error(f"Unknown TRANSPORT: {config.TRANSPORT}")
        return ExitCode.CONFIG_ERROR
    return run_local(argv)


if __name__ == "__main__":
    sys.exit(main())
