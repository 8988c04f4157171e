from rich.pretty import pprint

from argcursor import *


def build(cursor):
    jobs = Slot(int, 1)
    targets = []
    while cursor:
        if cursor.peek() == "--jobs":
            cursor.next()
            cursor.range(1, 64).validate_into(jobs)
        else:
            targets.append(cursor.next())
    return {"command": cursor.program_name, "jobs": jobs.value, "targets": targets}


if __name__ == '__main__':
    cursor = Cursor.from_process()
    results, faults = [], []
    while cursor:
        try:
            command = cursor.sub_command_until(lambda token: token == "--")
            results.append(build(command))
        except OutOfRangeError as error:
            pprint(error)
            raise SystemExit(2)
        faults.extend(command.faults)
        if cursor:
            cursor.shift()  # skip the "--" separator
    pprint(results)
    raise SystemExit(1 if faults else 0)
