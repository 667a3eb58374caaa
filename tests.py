# Small script to check that the example programs still behave the same after interpreter changes

from __future__ import annotations

from typing import List, Sequence, Tuple, TypedDict

import os
import pathlib
import subprocess
import sys
import json
import enum

# Colors because colors make everything better
class Colors(str, enum.Enum):
    Reset = '\033[0m'
    Red = '\033[1;31m'
    Green = '\033[1;32m'
    White = '\033[1;37m'

    def __str__(self) -> str:
        return self.value

cwd = pathlib.Path(__file__).parent
tests = cwd / 'tests'

DEFAULT_ARGS = ['--result']

def run(file: pathlib.Path, args: Sequence[str]) -> Tuple[int, str, str]:
    command = [sys.executable, '-m', 'salt', file.relative_to(cwd).as_posix(), *args]

    # Diagnostics are compared as plain text
    env = {**os.environ, 'NO_COLOR': '1'}

    process = subprocess.run(command, capture_output=True, cwd=cwd, env=env)
    return process.returncode, process.stdout.decode(), process.stderr.decode()

class TestResult(TypedDict):
    returncode: int
    args: List[str]
    stdout: str
    stderr: str

class Test:
    def __init__(self, file: pathlib.Path) -> None:
        self.file = file

    @property
    def output_file(self) -> pathlib.Path:
        return self.file.with_suffix('.output.json')

    def run(self) -> bool:
        result = self.parse_output_file()
        returncode, stdout, stderr = run(self.file, result['args'])

        if returncode != result['returncode']:
            print(f'- {Colors.Red}Test {self.file} failed with return code {returncode}.{Colors.Reset}')
            print('    Expected return code:', result['returncode'])

            return False

        if stdout != result['stdout']:
            print(f'- {Colors.Red}Test {self.file} failed.{Colors.Reset}')

            print('    Expected stdout:'); print(result['stdout'])
            print('    Actual stdout:'); print(stdout)

            return False

        if stderr != result['stderr']:
            print(f'- {Colors.Red}Test {self.file} failed.{Colors.Reset}')

            print('    Expected stderr:'); print(result['stderr'])
            print('    Actual stderr:'); print(stderr)

            return False

        return True

    def update(self) -> None:
        args = self.parse_output_file()['args'] if self.has_output_file() else DEFAULT_ARGS

        returncode, stdout, stderr = run(self.file, args)
        self.update_output_file(returncode, list(args), stdout, stderr)

    def has_output_file(self) -> bool:
        return self.output_file.exists()

    def parse_output_file(self) -> TestResult:
        with open(self.output_file, 'r') as f:
            return json.load(f)

    def update_output_file(
        self, returncode: int, args: List[str], stdout: str, stderr: str
    ) -> None:
        with open(self.output_file, 'w') as f:
            json.dump({
                'returncode': returncode,
                'args': args,
                'stdout': stdout,
                'stderr': stderr
            }, f, indent=4)

            f.write('\n')

def main() -> None:
    do_update = sys.argv[1:2] == ['update']

    failed = 0
    files = sorted(file for file in tests.iterdir() if file.suffix == '.salt')

    for i, file in enumerate(files):
        test = Test(file)
        print(f"-{Colors.White} Running test {i} ('{file.name}'){Colors.Reset}")

        if not test.has_output_file() or do_update:
            test.update()
            print('Updated output file.\n')

            continue

        if not test.run():
            failed += 1
            continue

        print(f'- {Colors.Green}Passed.{Colors.Reset}\n')

    if do_update:
        print(f'\nSuccessfully updated {len(files)} tests.')
        return

    if failed:
        print(f'\n{Colors.Red}{failed} of {len(files)} tests failed.{Colors.Reset}')
        sys.exit(1)

    print(f'\nSuccessfully ran {len(files)} tests.')

if __name__ == '__main__':
    main()
