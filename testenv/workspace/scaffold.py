"""testenv.workspace.scaffold

Harness scaffold files for the external runner.

Two fixed templates are emitted into the test root:

* ``testHelper.js`` - lifecycle hooks the tests call (database setup and
  teardown, collection clearing, fixture loading, default user creation,
  bearer tokens, external service mocks, poll-until-condition).
* ``setup.js`` - the runner's global setup file wiring those hooks to
  ``beforeAll``/``afterAll``/``beforeEach``.

The templates are not rendered: emission is byte-for-byte deterministic and
the runner alone executes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from testenv.io.fs import write_text_atomic
from testenv.log import ConsoleLogger, get_default_logger

HELPER_FILENAME = "testHelper.js"
SETUP_FILENAME = "setup.js"

TEST_HELPER_TEMPLATE = """\
// Test helper utilities
const path = require('path');
const mongoose = require('mongoose');
const { MongoMemoryServer } = require('mongodb-memory-server');

class TestHelper {
  constructor() {
    this.mongoServer = null;
  }

  // Start an in-memory MongoDB and connect to it
  async setupDatabase() {
    this.mongoServer = await MongoMemoryServer.create();
    await mongoose.connect(this.mongoServer.getUri());
  }

  // Disconnect and stop the in-memory server
  async cleanupDatabase() {
    if (mongoose.connection.readyState !== 0) {
      await mongoose.disconnect();
    }
    if (this.mongoServer) {
      await this.mongoServer.stop();
      this.mongoServer = null;
    }
  }

  // Remove every document from every collection
  async clearDatabase() {
    const collections = mongoose.connection.collections;
    for (const key of Object.keys(collections)) {
      await collections[key].deleteMany({});
    }
  }

  // Load fixtures/data/<fixtureName>.json into the matching model
  async loadFixtures(fixtureName) {
    const fixturePath = path.join(__dirname, 'fixtures', 'data', `${fixtureName}.json`);
    const fixtureData = require(fixturePath);
    const modelName = fixtureName.charAt(0).toUpperCase() + fixtureName.slice(1, -1);
    const Model = mongoose.model(modelName);
    await Model.insertMany(fixtureData);
    return fixtureData;
  }

  // Create and persist a user with sensible defaults
  async createTestUser(userData = {}) {
    const User = mongoose.model('User');
    const defaultUser = {
      email: 'test@example.com',
      password: 'password123',
      firstName: 'Test',
      lastName: 'User',
      role: 'user',
      isActive: true
    };
    const user = new User({ ...defaultUser, ...userData });
    await user.save();
    return user;
  }

  // Issue a bearer token for the given user id
  generateTestToken(userId, role = 'user') {
    const jwt = require('jsonwebtoken');
    return jwt.sign(
      { userId, role },
      process.env.JWT_SECRET || 'test-jwt-secret-key',
      { expiresIn: '1h' }
    );
  }

  // Replace outbound services with resolved mocks
  mockExternalAPIs() {
    jest.mock('../services/emailService', () => ({
      sendEmail: jest.fn().mockResolvedValue({ messageId: 'test-message-id' }),
      sendBulkEmail: jest.fn().mockResolvedValue({ sent: 10, failed: 0 })
    }));
    jest.mock('../services/smsService', () => ({
      sendSMS: jest.fn().mockResolvedValue({ sid: 'test-sms-id' })
    }));
    jest.mock('../services/paymentService', () => ({
      createPayment: jest.fn().mockResolvedValue({ id: 'test-payment-id', status: 'succeeded' }),
      refundPayment: jest.fn().mockResolvedValue({ id: 'test-refund-id', status: 'succeeded' })
    }));
  }

  // Poll `condition` every 100ms until it is truthy or `timeout` ms elapse
  async waitFor(condition, timeout = 5000) {
    const start = Date.now();
    while (Date.now() - start < timeout) {
      if (await condition()) {
        return true;
      }
      await new Promise(resolve => setTimeout(resolve, 100));
    }
    throw new Error('Timeout waiting for condition');
  }
}

module.exports = TestHelper;
"""

SETUP_TEMPLATE = """\
// Global test setup
const TestHelper = require('./testHelper');

global.testHelper = new TestHelper();

beforeAll(async () => {
  if (!process.env.USE_REAL_DB) {
    await global.testHelper.setupDatabase();
  }
  if (process.env.DISABLE_EXTERNAL_APIS !== 'false') {
    global.testHelper.mockExternalAPIs();
  }
});

afterAll(async () => {
  await global.testHelper.cleanupDatabase();
});

beforeEach(async () => {
  if (global.testHelper.mongoServer) {
    await global.testHelper.clearDatabase();
  }
});

// Integration tests talk to a real server; allow them more time.
jest.setTimeout(30000);

// Keep test output quiet unless VERBOSE_TESTS is set.
if (!process.env.VERBOSE_TESTS) {
  global.console = {
    ...console,
    log: jest.fn(),
    debug: jest.fn(),
    info: jest.fn(),
    warn: console.warn,
    error: console.error
  };
}
"""

SCAFFOLD_FILES: Tuple[Tuple[str, str, str], ...] = (
    (HELPER_FILENAME, TEST_HELPER_TEMPLATE, "test helper file"),
    (SETUP_FILENAME, SETUP_TEMPLATE, "runner setup file"),
)


@dataclass(frozen=True)
class ScaffoldResult:
    helper_path: Path
    setup_path: Path

    def paths(self) -> List[Path]:
        return [self.helper_path, self.setup_path]


class HarnessScaffolder:
    def __init__(self, test_root: Path, *, log: Optional[ConsoleLogger] = None) -> None:
        self.test_root = Path(test_root)
        self._log = log or get_default_logger()

    def emit(self) -> ScaffoldResult:
        written: List[Path] = []
        for filename, content, label in SCAFFOLD_FILES:
            path = self.test_root / filename
            write_text_atomic(path, content)
            self._log.info(f"Created {label}: {filename}")
            written.append(path)
        return ScaffoldResult(helper_path=written[0], setup_path=written[1])
