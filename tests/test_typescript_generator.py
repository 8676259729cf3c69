"""
Tests for the TypeScript generator.

Generated files are compared as text: the exact model and spec output for
a small class, then targeted fragments for every property shape.
"""

from pathlib import Path

import pytest

from obj_for_dto import generate_dto
from obj_for_dto.core.errors import (
    EmptySpecification,
    MissingClassName,
    MissingSpecification,
)

EMPLOYEE_MODEL = """\
import {hasValue} from '../../has-value'

export interface IEmployee {
    name: string
    age: number
}

export type EmployeeDTO = Partial<IEmployee>

export class Employee implements IEmployee {
    constructor(
        public readonly name: string,
        public readonly age: number
    ) {
    }

    static fromJson(json: any): Employee | undefined {
        if (!(json && json.name && hasValue(json.age)))
            return undefined

        return new Employee(json.name, json.age)
    }
}
"""

EMPLOYEE_SPEC = """\
import {Employee} from './employee'
import {v4} from 'uuid'
import {getRandomInt} from '../../setup-jest-esm'

export function getTestEmployee(): Employee {
    return new Employee(
        v4(),
        getRandomInt()
    )
}

describe('Employee', () => {
    it('should create an instance', () => {
        const name = v4()
        const age = getRandomInt()

        const employee = new Employee(name, age)

        expect(employee.name).toBe(name)
        expect(employee.age).toBe(age)
    })
})
"""


def write(generator, class_name, spec):
    bundle = generator.generate(class_name, spec)
    files = generator.render(bundle)
    for relative_path, text in files.items():
        path = generator.output_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return bundle, files


def model(generator, class_name, spec):
    bundle = generator.generate(class_name, spec)
    files = generator.render(bundle)
    return files[next(iter(files))]


class TestRenderedFiles:
    def test_exact_model_and_spec(self, ts_generator):
        generator = ts_generator(add_comments=False)
        files = generator.render(generator.generate("employee", "name,age:n"))

        assert list(files) == ["employee/employee.ts", "employee/employee.spec.ts"]
        assert files["employee/employee.ts"] == EMPLOYEE_MODEL
        assert files["employee/employee.spec.ts"] == EMPLOYEE_SPEC

    def test_header_comment(self, ts_generator):
        text = model(ts_generator(), "Employee", "name,age:n")
        assert text.startswith("// Generated by obj-for-dto: Employee 'name,age:n'\n")

    def test_flat_layout(self, ts_generator):
        files = ts_generator(flat=True).render(
            ts_generator(flat=True).generate("EmployeeRecord", "name")
        )
        assert list(files) == ["employee-record.ts", "employee-record.spec.ts"]

    def test_no_tests(self, ts_generator):
        generator = ts_generator(generate_tests=False)
        assert list(generator.render(generator.generate("Employee", "name"))) == [
            "employee/employee.ts"
        ]

    def test_regeneration_is_byte_identical(self, ts_generator):
        spec = "name,age:n,active:b?,tags:s[],when:d?,lead:Employee?"
        first = ts_generator().render(ts_generator().generate("Team", spec))
        second = ts_generator().render(ts_generator().generate("Team", spec))
        assert first == second

    def test_formatting(self, ts_generator):
        text = model(ts_generator(), "Team", "name,tags:s[]?,members:Employee[],when:d")
        assert text.endswith("}\n")
        assert "\n\n\n" not in text
        assert all(line == line.rstrip() for line in text.splitlines())


class TestDeclarations:
    def test_interface_lines(self, ts_generator):
        text = model(
            ts_generator(),
            "Employee",
            "name,age:n,active:b?,tags:s[],manager:Employee?,reports:Employee[]",
        )
        assert "    name: string\n" in text
        assert "    age: number\n" in text
        assert "    active: boolean | null\n" in text
        assert "    tags: string[]\n" in text
        assert "    manager: IEmployee | null\n" in text
        assert "    reports: IEmployee[]\n" in text

    def test_constructor_uses_class_types(self, ts_generator):
        text = model(ts_generator(), "Team", "lead:Employee?,when:d")
        assert "        public readonly lead: Employee | null,\n" in text
        assert "        public readonly when: Date\n" in text

    def test_dto_without_custom_properties(self, ts_generator):
        text = model(ts_generator(), "Employee", "name")
        assert "export type EmployeeDTO = Partial<IEmployee>\n" in text

    def test_dto_remaps_custom_properties(self, ts_generator):
        text = model(ts_generator(), "Team", "name,lead:Employee,members:Employee[]?")
        assert (
            "export type TeamDTO = Omit<Partial<ITeam>, 'lead' | 'members'> & {\n"
            "    lead?: EmployeeDTO | null\n"
            "    members?: EmployeeDTO[] | null\n"
            "}\n"
        ) in text


class TestFromJson:
    def test_guard_combines_required_properties(self, ts_generator):
        text = model(ts_generator(), "Employee", "name,age:n,active:b?,tags:s[]")
        assert "if (!(json && json.name && hasValue(json.age) && Array.isArray(json.tags)))" in text

    def test_no_required_guards(self, ts_generator):
        text = model(ts_generator(), "Employee", "name:s?,when:d")
        assert "        if (!json)\n" in text

    def test_inline_arguments(self, ts_generator):
        text = model(ts_generator(), "Employee", "name,nick:s?,active:b?")
        assert (
            "return new Employee(json.name, json.nick || null, "
            "hasValue(json.active) ? json.active : null)"
        ) in text

    def test_required_date(self, ts_generator):
        text = model(ts_generator(), "Event", "when:d")
        assert (
            "        const when = new Date(json.when)\n"
            "        if (!isFinite(when.getTime()))\n"
            "            return undefined\n"
        ) in text

    def test_optional_date(self, ts_generator):
        text = model(ts_generator(), "Event", "when:d?")
        assert (
            "        const when = json.when ? new Date(json.when) : null\n"
            "        if (when && !isFinite(when.getTime()))\n"
        ) in text

    def test_required_custom(self, ts_generator):
        text = model(ts_generator(), "Team", "lead:Employee")
        assert (
            "        const lead = Employee.fromJson(json.lead)\n"
            "        if (!lead)\n"
            "            return undefined\n"
        ) in text

    def test_optional_custom(self, ts_generator):
        text = model(ts_generator(), "Team", "lead:Employee?")
        assert "        const lead = Employee.fromJson(json.lead) ?? null\n" in text

    def test_required_custom_array_drops_failures(self, ts_generator):
        text = model(ts_generator(), "Team", "members:Employee[]")
        assert (
            "        const members = json.members"
            ".map((x: any) => Employee.fromJson(x)).filter(hasValue)\n"
        ) in text

    def test_number_array_is_all_or_nothing(self, ts_generator):
        text = model(ts_generator(), "Series", "vals:n[]")
        assert (
            "        let vals: number[] = []\n"
            "        if (!Array.isArray(json.vals))\n"
            "            return undefined\n"
            "\n"
            "        vals = json.vals.filter(Number.isFinite)\n"
            "        if (vals.length !== json.vals.length)\n"
            "            return undefined\n"
        ) in text

    def test_optional_array_wrapped(self, ts_generator):
        text = model(ts_generator(), "Post", "tags:s[]?")
        assert (
            "        let tags: string[] = []\n"
            "        if (json.tags) {\n"
            "            if (!Array.isArray(json.tags))\n"
            "                return undefined\n"
            "\n"
            "            tags = json.tags.filter(hasValue)\n"
            "            if (tags.length !== json.tags.length)\n"
            "                return undefined\n"
            "        }\n"
        ) in text

    def test_date_array(self, ts_generator):
        text = model(ts_generator(), "Log", "dates:d[]")
        assert (
            "dates = json.dates.map((x: any) => new Date(x))"
            ".filter((x: Date) => isFinite(x.getTime()))"
        ) in text

    def test_reserved_local_renamed(self, ts_generator):
        bundle = ts_generator().generate("Request", "json:Payload?")
        assert "const json_ = Payload.fromJson(json.json) ?? null" in bundle.extractions

    def test_local_never_shadows_custom_type(self, ts_generator):
        text = model(ts_generator(), "Team", "Employee:Employee")
        assert (
            "        const Employee_ = Employee.fromJson(json.Employee)\n"
            "        if (!Employee_)\n"
        ) in text
        assert "return new Team(Employee_)" in text


class TestImports:
    def test_sibling_class_and_fixture_imported(self, ts_generator, ts_workspace: Path):
        write(ts_generator(), "Employee", "name")
        bundle, files = write(ts_generator(), "Team", "name,lead:Employee,members:Employee[]")

        model_text = files["team/team.ts"]
        spec_text = files["team/team.spec.ts"]

        assert (
            "import {Employee, EmployeeDTO, IEmployee} from '../employee/employee'"
            in model_text
        )
        assert "import {hasValue} from '../../has-value'" in model_text
        assert "import {getTestEmployee} from '../employee/employee.spec'" in spec_text
        assert "        getTestEmployee(),\n        [getTestEmployee()]\n" in spec_text
        assert bundle.warnings == []

    def test_missing_import_is_a_warning(self, ts_generator):
        bundle = ts_generator().generate("Team", "name,lead:Employee")
        assert "Unable to find employee.ts; import omitted" in bundle.warnings
        assert "Unable to find employee.spec.ts; import omitted" in bundle.warnings
        assert not any("employee" in line for line in bundle.imports)

    def test_self_reference_not_imported(self, ts_generator):
        bundle = ts_generator().generate("Employee", "name,manager:Employee?,reports:Employee[]")
        assert bundle.imports == ["import {hasValue} from '../../has-value'"]
        assert bundle.warnings == []

    def test_self_reference_fixture_is_finite(self, ts_generator):
        files = ts_generator().render(
            ts_generator().generate("Employee", "name,manager:Employee?,reports:Employee[]")
        )
        spec_text = files["employee/employee.spec.ts"]
        assert "getTestEmployee()," not in spec_text
        assert "        const manager = null\n" in spec_text
        assert "        const reports = []\n" in spec_text

    def test_presence_helper_only_when_used(self, ts_generator):
        bundle = ts_generator().generate("Employee", "name,when:d")
        assert bundle.imports == []

    def test_random_helpers_sorted(self, ts_generator):
        bundle = ts_generator().generate("Employee", "when:d,active:b,age:n")
        assert (
            "import {getRandomBoolean, getRandomDate, getRandomInt} "
            "from '../../setup-jest-esm'"
        ) in bundle.test_imports

    def test_search_depth(self, ts_generator):
        bundle = ts_generator(search_depth=1).generate("Employee", "age:n")
        assert "Unable to find has-value.ts; import omitted" in bundle.warnings


class TestSpecFile:
    def test_expectations(self, ts_generator):
        files = ts_generator().render(
            ts_generator().generate("Employee", "name,tags:s[],when:d,active:b?")
        )
        spec_text = files["employee/employee.spec.ts"]
        assert "expect(employee.name).toBe(name)" in spec_text
        assert "expect(employee.tags).toEqual(tags)" in spec_text
        assert "expect(employee.when).toStrictEqual(when)" in spec_text
        assert "expect(employee.active).toBe(active)" in spec_text
        assert "        const tags = [v4()]\n" in spec_text

    def test_entity_name_avoids_property_local(self, ts_generator):
        files = ts_generator().render(ts_generator().generate("Name", "name"))
        spec_text = files["name/name.spec.ts"]
        assert "const nameInstance = new Name(name)" in spec_text
        assert "expect(nameInstance.name).toBe(name)" in spec_text

    def test_constants_never_shadow_imported_names(self, ts_generator):
        files = ts_generator().render(
            ts_generator().generate("Team", "Team,getTestEmployee:n,lead:Employee")
        )
        spec_text = files["team/team.spec.ts"]
        assert "        const Team_ = v4()\n" in spec_text
        assert "        const getTestEmployee_ = getRandomInt()\n" in spec_text
        assert "        const lead = getTestEmployee()\n" in spec_text
        assert "const team = new Team(Team_, getTestEmployee_, lead)" in spec_text

    def test_reserved_names_do_not_leak_between_runs(self, ts_generator):
        generator = ts_generator()
        generator.generate("Team", "Employee:Employee")
        files = generator.render(generator.generate("Office", "Employee"))
        assert "        const Employee = v4()\n" in files["office/office.spec.ts"]


class TestOptionsAndWarnings:
    def test_sorted_properties(self, ts_generator):
        bundle = ts_generator(sort_properties=True).generate("Employee", "zeta,alpha:n")
        assert bundle.interface_text == "    alpha: number\n    zeta: string"

    def test_type_alias(self, ts_generator):
        bundle = ts_generator(type_aliases={"e": "Employee"}).generate("Team", "lead:e?")
        assert bundle.interface_text == "    lead: IEmployee | null"

    def test_lowercase_custom_type_warns(self, ts_generator):
        bundle = ts_generator().generate("Team", "lead:e?")
        assert any("map it with a type alias" in w for w in bundle.warnings)

    def test_all_optional_warns(self, ts_generator):
        bundle = ts_generator().generate("Employee", "name:s?")
        assert "Employee has no required properties; any object will decode" in bundle.warnings

    def test_reserved_property_warns(self, ts_generator):
        bundle = ts_generator().generate("Thing", "default")
        assert any("reserved word" in w for w in bundle.warnings)

    def test_required_self_reference_warns(self, ts_generator):
        bundle = ts_generator().generate("Node", "parent:Node")
        assert any("no finite JSON value" in w for w in bundle.warnings)

    def test_class_name_is_classified(self, ts_generator):
        bundle = ts_generator().generate("employee-record", "name")
        assert bundle.class_name == "EmployeeRecord"
        assert bundle.file_stem == "employee-record"
        assert bundle.interface_name == "IEmployeeRecord"

    def test_metadata(self, ts_generator):
        bundle = ts_generator().generate("Team", "name,lead:Employee?,size:n")
        assert bundle.metadata["property_count"] == 3
        assert bundle.metadata["required_count"] == 2
        assert bundle.metadata["custom_types"] == ["Employee"]


class TestErrors:
    @pytest.mark.parametrize("name", ["", "   "])
    def test_missing_class_name(self, ts_generator, name):
        with pytest.raises(MissingClassName, match="Must provide class name"):
            ts_generator().generate(name, "name")

    def test_missing_specification(self, ts_generator):
        with pytest.raises(MissingSpecification):
            ts_generator().generate("Employee", "")

    def test_empty_specification(self, ts_generator):
        with pytest.raises(EmptySpecification):
            ts_generator().generate("Employee", " , ")

    def test_generate_dto_reports_failure(self, tmp_path):
        result = generate_dto("Employee", "name,name", output_dir=tmp_path)
        assert not result.success
        assert "declared more than once" in result.error_message

    def test_generate_dto_success(self, tmp_path):
        result = generate_dto("Employee", "name", "ts", output_dir=tmp_path)
        assert result.success
        assert result.code == result.files["employee/employee.ts"]
        assert result.metadata["files"] == [
            "employee/employee.ts",
            "employee/employee.spec.ts",
        ]
