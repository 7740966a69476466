# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

import os
import sys
import unittest
from unittest.mock import patch

# Patch sys.path to import from the repository root
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from fastmcp import Client
from fastmcp.exceptions import ToolError
from helpers import API_URL, RecordingTransport, extract_call_tool_text, make_config

import src.common.server
import src.tools  # This ensures tools are registered
from src.common.client import TestRailClient
from src.common.operations import parse_operation
from src.tools.projects import ProjectRequest, build_project_request


def build(arguments):
    return build_project_request(parse_operation(ProjectRequest, arguments), make_config())


class TestBuildProjectRequest(unittest.TestCase):
    def test_get_project(self):
        resolved = build({"operation": "get_project", "project_id": 4})
        self.assertEqual(resolved.method, "GET")
        self.assertEqual(resolved.url, f"{API_URL}/get_project/4")
        self.assertIsNone(resolved.body)

    def test_get_projects_without_filters(self):
        resolved = build({"operation": "get_projects"})
        self.assertEqual(resolved.method, "GET")
        self.assertEqual(resolved.url, f"{API_URL}/get_projects")

    def test_get_projects_with_filters(self):
        resolved = build(
            {"operation": "get_projects", "is_completed": False, "limit": 10, "offset": 20}
        )
        self.assertEqual(
            resolved.url, f"{API_URL}/get_projects&is_completed=0&limit=10&offset=20"
        )

    def test_add_project(self):
        resolved = build(
            {
                "operation": "add_project",
                "name": "Web",
                "announcement": "Hello",
                "suite_mode": 3,
            }
        )
        self.assertEqual(resolved.method, "POST")
        self.assertEqual(resolved.url, f"{API_URL}/add_project")
        self.assertEqual(
            resolved.body, {"name": "Web", "announcement": "Hello", "suite_mode": 3}
        )

    def test_update_project_drops_path_id(self):
        resolved = build(
            {"operation": "update_project", "project_id": 8, "is_completed": True}
        )
        self.assertEqual(resolved.method, "POST")
        self.assertEqual(resolved.url, f"{API_URL}/update_project/8")
        self.assertEqual(resolved.body, {"is_completed": True})

    def test_delete_project_has_no_body(self):
        resolved = build({"operation": "delete_project", "project_id": 8})
        self.assertEqual(resolved.method, "POST")
        self.assertEqual(resolved.url, f"{API_URL}/delete_project/8")
        self.assertIsNone(resolved.body)


class TestManageProjectsTool(unittest.IsolatedAsyncioTestCase):
    async def call(self, transport, arguments):
        with patch.object(TestRailClient, "transport", transport):
            async with Client(src.common.server.mcp) as client:
                result = await client.call_tool("manage_testrail_projects", arguments)
        return extract_call_tool_text(result)

    async def test_get_project_returns_pretty_json(self):
        transport = RecordingTransport(json_body={"id": 1, "name": "Web"})
        text = await self.call(transport, {"operation": "get_project", "project_id": 1})
        self.assertEqual(text, '{\n  "id": 1,\n  "name": "Web"\n}')
        self.assertEqual(
            str(transport.last_request.url),
            "https://testrail.example.com/index.php?/api/v2/get_project/1",
        )

    async def test_delete_project_returns_fixed_message(self):
        transport = RecordingTransport(text="")
        text = await self.call(transport, {"operation": "delete_project", "project_id": 1})
        self.assertEqual(text, "Operation delete_project successful.")
        self.assertEqual(transport.last_request.method, "POST")

    async def test_missing_project_id_rejected_before_request(self):
        transport = RecordingTransport(json_body={})
        with self.assertRaises(ToolError) as context:
            await self.call(transport, {"operation": "update_project", "name": "X"})
        self.assertIn("project_id", str(context.exception))
        self.assertEqual(transport.requests, [])

    async def test_invalid_suite_mode_rejected(self):
        transport = RecordingTransport(json_body={})
        with self.assertRaises(ToolError):
            await self.call(
                transport, {"operation": "add_project", "name": "X", "suite_mode": 7}
            )
        self.assertEqual(transport.requests, [])

    async def test_api_error_is_returned_as_text(self):
        transport = RecordingTransport(400, text='{"error":"Field :name is required."}')
        text = await self.call(transport, {"operation": "add_project", "name": "X"})
        self.assertTrue(text.startswith("Failed to perform operation add_project."))
        self.assertIn("400", text)
        self.assertIn('{"error":"Field :name is required."}', text)


if __name__ == "__main__":
    unittest.main()
